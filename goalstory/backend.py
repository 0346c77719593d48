# =============================================================================
# goalstory/backend.py  —  The HTTP Exchange with the Goal Story Backend
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends ONE BackendRequest and returns the decoded JSON reply.  Anything
#   other than a 2xx reply, and any transport failure (timeout, refused
#   connection, DNS), is raised as a BackendError that carries the full
#   diagnostic context:
#
#     status code · URL · method · request body · backend error payload
#
#   so the calling agent can see what went wrong without another round trip.
#
# HEADERS:
#   Every request carries "Authorization: Bearer <token>" and
#   "Content-Type: application/json".  The token only ever goes into
#   request headers.  It is never part of a BackendError, a log line or a
#   ToolResult.
#
# CLIENT LIFETIME:
#   A BackendClient can be given an httpx.AsyncClient (tests inject one
#   built on httpx.MockTransport).  Without one it opens a client per
#   request, the same pattern as a short-lived "async with" session.
# =============================================================================

import json
import logging
from typing import Any, Optional

import httpx

from goalstory.config import GatewayConfig
from goalstory.models import BackendRequest


logger = logging.getLogger(__name__)


class BackendError(Exception):
    """The backend answered with a non-2xx status, or could not be reached."""

    def __init__(
        self,
        request: BackendRequest,
        status: Optional[int] = None,
        payload: Any = None,
        reason: str = "",
    ):
        self.request = request
        self.status = status
        self.payload = payload
        self.reason = reason
        super().__init__(self.describe())

    def describe(self) -> str:
        context = (
            f"URL: {self.request.url}, Method: {self.request.method}, "
            f"Body: {_dump(self.request.body)}"
        )
        if self.status is None:
            return f"{self.reason}. {context}"
        return f"HTTP Error {self.status}. {context}. Error text: {_dump(self.payload)}"


def _dump(value: Any) -> str:
    if value is None:
        return "(none)"
    return json.dumps(value, ensure_ascii=False)


def auth_headers(token: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {token}",
    }


def decode_body(response: httpx.Response) -> Any:
    """JSON payload of a response, falling back to its text."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class BackendClient:
    """Performs the single HTTP exchange for one tool call."""

    def __init__(self, config: GatewayConfig, client: Optional[httpx.AsyncClient] = None):
        self._config = config
        self._client = client

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout)

    async def send(self, request: BackendRequest) -> Any:
        """Send one request and return the decoded reply payload.

        Raises:
            BackendError: on a non-2xx status or any httpx transport error.
        """
        if self._client is not None:
            return await self._send_with(self._client, request)
        async with self._new_client() as client:
            return await self._send_with(client, request)

    async def _send_with(self, client: httpx.AsyncClient, request: BackendRequest) -> Any:
        kwargs: dict[str, Any] = {"headers": auth_headers(self._config.token)}
        if request.body is not None:
            kwargs["json"] = request.body

        try:
            response = await client.request(request.method, request.url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", request.method, request.url, type(e).__name__)
            raise BackendError(request, reason=f"{type(e).__name__}: {e}") from e

        payload = decode_body(response)
        if response.is_success:
            return payload

        logger.warning("%s %s returned HTTP %s", request.method, request.url, response.status_code)
        raise BackendError(request, status=response.status_code, payload=payload)
