"""Spotify API client exceptions."""


class SpotifyClientError(Exception):
    """Base exception for Spotify client errors."""


class SpotifyAuthError(SpotifyClientError):
    """Spotify kept answering 401 after the token refresh callback ran."""


class SpotifyRateLimitError(SpotifyClientError):
    """Still rate limited (429) after every retry."""

    def __init__(self, retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        suffix = f" (retry-after: {retry_after}s)" if retry_after is not None else ""
        super().__init__(f"Spotify rate limit exceeded{suffix}")


class _SpotifyHTTPError(SpotifyClientError):
    kind = "error"

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"Spotify {self.kind}: HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SpotifyServerError(_SpotifyHTTPError):
    """5xx from Spotify that did not clear after the final retry."""

    kind = "server error"


class SpotifyRequestError(_SpotifyHTTPError):
    """Non-retryable 4xx (anything other than 401 and 429)."""

    kind = "request error"
