"""Search-grounded question answering over the Gemini API."""
