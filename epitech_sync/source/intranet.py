"""Epitech intranet client using the user's session cookie."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from epitech_sync.constants import INTRA_BASE_URL, SESSION_COOKIE_NAME
from epitech_sync.dates import format_api_date
from epitech_sync.exceptions import MalformedPayloadError, NotAuthenticatedError, SourceError
from epitech_sync.models.raw import RawEvent

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED_MESSAGE = "Not authenticated. Please log in to the Epitech intranet."


@dataclass
class AuthCheck:
    """Result of an intranet session check."""

    authenticated: bool
    user: dict[str, Any] = field(default_factory=dict)


class EventSource(Protocol):
    """Protocol for the authoritative event feed."""

    async def check_authentication(self) -> AuthCheck:
        """Check whether the ambient session is valid."""
        ...

    async def fetch_planning(self, start: date, end: date) -> list[RawEvent]:
        """Return raw planning records between ``start`` and ``end``."""
        ...


class IntranetClient:
    """Fetch planning records from the intranet JSON API."""

    def __init__(
        self,
        base_url: str = INTRA_BASE_URL,
        session_cookie: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_http_client = http_client is None
        cookies = {SESSION_COOKIE_NAME: session_cookie} if session_cookie else None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout, cookies=cookies)

    async def _get(self, path: str, params: dict[str, str]) -> httpx.Response:
        try:
            return await self._http_client.get(
                f"{self.base_url}{path}",
                params=params,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise SourceError(f"Intranet request failed: {e}") from e

    async def check_authentication(self) -> AuthCheck:
        try:
            response = await self._get("/user/", {"format": "json"})
        except SourceError as e:
            logger.warning(f"Authentication check failed: {e}")
            return AuthCheck(authenticated=False)

        if not response.is_success:
            return AuthCheck(authenticated=False)
        try:
            user = response.json()
        except ValueError:
            return AuthCheck(authenticated=False)
        return AuthCheck(authenticated=True, user=user if isinstance(user, dict) else {})

    async def fetch_planning(self, start: date, end: date) -> list[RawEvent]:
        """Fetch planning records for a date range.

        Raises:
            NotAuthenticatedError: On HTTP 401/403
            MalformedPayloadError: If the payload is not a list of records
            SourceError: On any other HTTP failure
        """
        response = await self._get(
            "/planning/load",
            {
                "format": "json",
                "start": format_api_date(start),
                "end": format_api_date(end),
            },
        )

        if response.status_code in (401, 403):
            raise NotAuthenticatedError(NOT_AUTHENTICATED_MESSAGE)
        if not response.is_success:
            raise SourceError(
                f"Failed to fetch planning: {response.status_code} {response.reason_phrase}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedPayloadError("Unexpected API response format") from e

        if not isinstance(data, list):
            raise MalformedPayloadError("Unexpected API response format")

        try:
            records = [RawEvent.model_validate(item) for item in data]
        except ValidationError as e:
            raise MalformedPayloadError(f"Invalid planning record: {e}") from e

        logger.info(f"Fetched {len(records)} planning records ({start} to {end})")
        return records

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()
