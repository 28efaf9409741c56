GEMINI_MODEL = "gemini-2.5-flash-preview-09-2025"
GEMINI_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    f"{GEMINI_MODEL}:generateContent"
)

# Retry policy for the generateContent call
MAX_ATTEMPTS = 3
INITIAL_BACKOFF_SECONDS = 1.0
RATE_LIMITED_STATUS = 429

MAX_QUERY_LENGTH = 10_000
DEFAULT_ASK_RATE_LIMIT = "30/minute"

NO_CONTENT_MESSAGE = (
    "The model did not return a valid response. "
    "This might be due to safety filters or an internal error."
)
