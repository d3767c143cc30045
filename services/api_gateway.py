"""
services/api_gateway.py – Async JSON client for the Game Hub backend.

Every call goes through ``ApiGateway.call``, which sends JSON, merges caller
headers over ``Content-Type: application/json`` and turns any transport or
non-2xx failure into a single ``ApiError``. Such failures are logged, posted
as an "error" notification and re-raised so the caller decides recovery.

Responses are wrapped in ``{success, data, error}``; ``success: false`` is an
expected business-rule rejection and is only posted as a notification.
"""

import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import httpx

from models.game_record import Envelope
from services.exceptions import ApiError
from services.notifications import NotificationCenter

logger = logging.getLogger(__name__)

# ── Configuration ────────────────────────────────────────────────────────────

# Backend base URL; main.py overrides it from GAMEHUB_API_BASE.
API_BASE_URL: str = "http://localhost:3000/api"

# HTTP timeout (seconds)
HTTP_TIMEOUT: float = 30.0

# Number of IGDB candidates requested per store search.
STORE_SEARCH_LIMIT: int = 12

DEFAULT_HEADERS: Dict[str, str] = {"Content-Type": "application/json"}

# ── Public API ───────────────────────────────────────────────────────────────


class ApiGateway:
    """
    Uniform request/response wrapper over the backend.

    Parameters
    ----------
    base_url      : Prefix prepended to every endpoint path.
    notifications : Where user-visible failure messages are posted.
    client        : Optional pre-built ``httpx.AsyncClient`` (tests inject
                    one with a ``MockTransport``).
    timeout       : Per-request timeout used when the client is built here.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        notifications: Optional[NotificationCenter] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._notifications = notifications or NotificationCenter()
        self._client = client
        self._timeout = timeout

    async def __aenter__(self) -> "ApiGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ── Transport ────────────────────────────────────────────────────────────

    async def call(
        self,
        endpoint: str,
        method: str = "GET",
        *,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Perform one request and return the decoded JSON body.

        Raises
        ------
        ApiError
            On network failure, non-2xx status or a body that is not JSON.
        """
        url = f"{self._base_url}{endpoint}"
        merged_headers = {**DEFAULT_HEADERS, **(headers or {})}

        try:
            response = await self._get_client().request(
                method, url, json=json, params=params, headers=merged_headers
            )
        except httpx.RequestError as exc:
            raise self._failure(method, url, ApiError(None, str(exc))) from exc

        if not response.is_success:
            raise self._failure(
                method, url, ApiError(response.status_code, response.text[:200])
            )

        try:
            return response.json()
        except ValueError as exc:
            raise self._failure(
                method, url, ApiError(response.status_code, "Response body is not JSON")
            ) from exc

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        **kwargs: Any,
    ) -> Envelope:
        """``call`` plus envelope decoding; ``success: false`` is reported, not raised."""
        envelope = Envelope.from_json(await self.call(endpoint, method, **kwargs))
        if not envelope.success:
            message = envelope.error or "The server rejected the request."
            logger.debug("%s %s rejected: %s", method, endpoint, message)
            self._notifications.notify(message, "warning")
        return envelope

    # ── Endpoints ────────────────────────────────────────────────────────────

    async def load_games(self) -> Envelope:
        return await self.request("/games")

    async def add_game(self, payload: Mapping[str, Any]) -> Envelope:
        return await self.request("/games", "POST", json=dict(payload))

    async def fetch_metadata(self, game_id: str) -> Envelope:
        return await self.request(f"/games/{_segment(game_id)}/metadata", "POST")

    async def fetch_game_details(self, game_id: str) -> Envelope:
        return await self.request(f"/games/{_segment(game_id)}")

    async def search_store(self, query: str, limit: int = STORE_SEARCH_LIMIT) -> Envelope:
        return await self.request("/search/igdb", params={"q": query, "limit": limit})

    # ── Images ───────────────────────────────────────────────────────────────

    async def fetch_image(self, url: str) -> Optional[bytes]:
        """
        Download a cover image from an absolute URL.

        Covers are decoration, so failures are logged at DEBUG and reported as
        None rather than raised or posted as notifications.
        """
        try:
            response = await self._get_client().get(url, follow_redirects=True)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.debug("Cover download failed: %s (%s)", url, exc)
            return None
        if not response.is_success:
            logger.debug("Cover download failed: %s -> HTTP %d", url, response.status_code)
            return None
        return response.content

    # ── Private helpers ──────────────────────────────────────────────────────

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def _failure(self, method: str, url: str, error: ApiError) -> ApiError:
        logger.error(
            "API call failed: %s %s -> %s %s", method, url, error, error.detail
        )
        self._notifications.notify(f"API call failed: {error}", "error")
        return error


def _segment(value: str) -> str:
    """Escape an id for use as a single URL path segment."""
    return quote(str(value), safe="")
