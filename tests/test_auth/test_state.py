"""Tests for OAuthStateManager."""

from unittest.mock import patch

from wrapped_api.auth.state import OAuthStateManager

KEY = "test-secret-key-for-hmac"


def test_generate_and_verify() -> None:
    mgr = OAuthStateManager(key=KEY, ttl_seconds=300)
    assert mgr.verify(mgr.generate()) is True


def test_tampered_signature_fails() -> None:
    mgr = OAuthStateManager(key=KEY, ttl_seconds=300)
    issued_at, _sig = mgr.generate().split(".", 1)
    assert mgr.verify(f"{issued_at}.{'a' * 64}") is False


def test_other_key_fails() -> None:
    state = OAuthStateManager(key=KEY, ttl_seconds=300).generate()
    assert OAuthStateManager(key="different-key", ttl_seconds=300).verify(state) is False


def test_expired_state_fails() -> None:
    mgr = OAuthStateManager(key=KEY, ttl_seconds=300)
    with patch("wrapped_api.auth.state.time") as mock_time:
        mock_time.time.return_value = 1_000_000.0
        state = mgr.generate()
    assert mgr.verify(state) is False


def test_malformed_state_fails() -> None:
    mgr = OAuthStateManager(key=KEY, ttl_seconds=300)
    assert mgr.verify("no-dot-separator") is False
    assert mgr.verify("") is False
    assert mgr.verify("not-a-number.abcdef") is False
