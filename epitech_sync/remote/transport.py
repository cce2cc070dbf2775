"""Bearer-token HTTP transport for remote calendar APIs."""

import logging
from typing import Any, Awaitable, Callable

import httpx

from epitech_sync.exceptions import (
    CalendarNotConnectedError,
    ReconnectRequiredError,
    RemoteCalendarError,
    RemoteRequestError,
)

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Awaitable[str]]


def static_token(service: str, token: str | None) -> TokenProvider:
    """Token provider returning a token obtained out of band."""

    async def provide() -> str:
        if not token:
            raise CalendarNotConnectedError(f"Not connected to {service} Calendar")
        return token

    return provide


def safe_error_message(response: httpx.Response) -> str:
    """Extract a short error message from an API error response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error_payload = payload.get("error")
        if isinstance(error_payload, dict):
            message = error_payload.get("message")
            if isinstance(message, str) and message.strip():
                return " ".join(message.split())[:200]
        if isinstance(error_payload, str) and error_payload.strip():
            return " ".join(error_payload.split())[:200]

    return response.reason_phrase or "Request failed without an error payload"


class BearerTransport:
    """Authenticated JSON requests against one remote calendar API.

    A 401 is never surfaced as a generic failure: it becomes a
    ``ReconnectRequiredError`` carrying a user-actionable message.
    """

    def __init__(
        self,
        service: str,
        base_url: str,
        token_provider: TokenProvider,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.service = service
        self.base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    def _url(self, path: str) -> str:
        # Pagination links come back as absolute URLs
        if path.startswith(("http://", "https://")):
            return path
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{normalized_path}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        token = await self._token_provider()
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        url = self._url(path)

        try:
            response = await self._http_client.request(
                method, url, params=params, json=json_body, headers=headers
            )
        except httpx.HTTPError as exc:
            raise RemoteCalendarError(f"{self.service} request failed: {exc}") from exc

        if response.status_code == 401:
            raise ReconnectRequiredError(
                f"Authentication expired. Please reconnect {self.service} Calendar."
            )

        if response.status_code < 200 or response.status_code >= 300:
            logger.debug(f"{self.service} {method} {url} -> {response.status_code}")
            raise RemoteRequestError(
                service=self.service,
                status_code=response.status_code,
                message=safe_error_message(response),
            )

        if response.status_code == 204 or not response.content:
            return {}

        try:
            payload = response.json()
        except ValueError as exc:
            raise RemoteCalendarError(
                f"{self.service} API returned invalid JSON for a successful response"
            ) from exc

        if not isinstance(payload, dict):
            raise RemoteCalendarError(
                f"{self.service} API returned an unexpected JSON payload shape"
            )
        return payload

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_http_client:
            await self._http_client.aclose()
