"""OAuth state parameter management for CSRF protection."""

import hashlib
import hmac
import time


class OAuthStateManager:
    """Stateless HMAC-signed OAuth ``state`` values with a TTL.

    Format: ``{unix_ts}.{hex_sha256_hmac}``.
    """

    def __init__(self, key: str, ttl_seconds: int) -> None:
        self._key = key
        self._ttl_seconds = ttl_seconds

    def generate(self) -> str:
        issued_at = str(int(time.time()))
        return f"{issued_at}.{self._sign(issued_at)}"

    def verify(self, state: str) -> bool:
        """True when the signature matches and the state is younger than the TTL."""
        issued_at, sep, signature = state.partition(".")
        if not sep or not hmac.compare_digest(signature, self._sign(issued_at)):
            return False
        try:
            age = time.time() - int(issued_at)
        except ValueError:
            return False
        return 0 <= age <= self._ttl_seconds

    def _sign(self, data: str) -> str:
        return hmac.new(self._key.encode(), data.encode(), hashlib.sha256).hexdigest()
