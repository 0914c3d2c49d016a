"""HTTP client for the history import endpoint, authenticated with the user's JWT."""

from typing import Any

import httpx

from wrapped_common.history_import import ImportResult

IMPORT_PATH = "/api/history/import"


class ApiError(Exception):
    """Raised when the API is unreachable or returns an error response."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"API error {status_code}: {detail}")


class ImportApiClient:
    """Posts chunks of raw history entries to ``/api/history/import``."""

    def __init__(
        self,
        base_url: str,
        access_token: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Authorization": f"Bearer {access_token}"},
            transport=transport,
        )

    async def __aenter__(self) -> "ImportApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close underlying HTTP client."""
        await self._client.aclose()

    @staticmethod
    def _error_detail(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text
        if isinstance(body, dict) and "error" in body:
            return str(body["error"])
        return resp.text

    async def import_entries(self, entries: list[dict[str, Any]]) -> ImportResult:
        """POST one chunk of entries and return the server's counters."""
        try:
            resp = await self._client.post(IMPORT_PATH, json={"entries": entries})
        except httpx.RequestError as exc:
            raise ApiError(503, f"API unavailable: {exc}") from exc
        if resp.status_code == 401:
            raise ApiError(401, "Authentication required")
        if resp.status_code >= 400:
            raise ApiError(resp.status_code, self._error_detail(resp))
        try:
            return ImportResult.model_validate(resp.json())
        except ValueError as exc:
            raise ApiError(resp.status_code, f"Unexpected response body: {exc}") from exc
