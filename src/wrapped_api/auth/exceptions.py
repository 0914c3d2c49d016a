"""Domain exceptions for the auth module."""


class OAuthError(Exception):
    """Base exception for OAuth errors."""


class InvalidStateError(OAuthError):
    """OAuth state parameter failed signature or TTL checks."""


class SpotifyAPIError(OAuthError):
    """Spotify rejected a token exchange or profile request."""

    def __init__(self, action: str, status_code: int, detail: str) -> None:
        self.action = action
        self.spotify_status_code = status_code
        self.detail = detail
        super().__init__(f"Spotify API error during {action}: HTTP {status_code}: {detail}")


class TokenRefreshError(Exception):
    """Spotify refused to refresh a user's access token."""

    def __init__(self, spotify_user_id: str, detail: str) -> None:
        self.spotify_user_id = spotify_user_id
        self.detail = detail
        super().__init__(f"Token refresh failed for {spotify_user_id}: {detail}")
