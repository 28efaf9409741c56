import pytest

from grounded_qa.exceptions import RequestInFlightError
from grounded_qa.utils.in_flight import InFlightGuard


class TestInFlightGuard:
    def test_second_claim_on_same_key_is_rejected(self):
        guard = InFlightGuard()

        with guard.claim("10.0.0.1"):
            assert guard.is_busy("10.0.0.1")
            with pytest.raises(RequestInFlightError):
                with guard.claim("10.0.0.1"):
                    pass

        assert not guard.is_busy("10.0.0.1")

    def test_different_keys_do_not_block_each_other(self):
        guard = InFlightGuard()

        with guard.claim("10.0.0.1"):
            with guard.claim("10.0.0.2"):
                assert guard.is_busy("10.0.0.2")

    def test_key_is_released_when_block_raises(self):
        guard = InFlightGuard()

        with pytest.raises(RuntimeError):
            with guard.claim("10.0.0.1"):
                raise RuntimeError("boom")

        assert not guard.is_busy("10.0.0.1")

    def test_rejected_claim_keeps_original_holder(self):
        guard = InFlightGuard()

        with guard.claim("10.0.0.1"):
            with pytest.raises(RequestInFlightError):
                with guard.claim("10.0.0.1"):
                    pass
            assert guard.is_busy("10.0.0.1")
