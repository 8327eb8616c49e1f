"""Async HTTP transport for the storefront API.

Wraps ``httpx.AsyncClient`` and decodes the API envelope
``{success, error, message, data}`` into a ``RemoteResult`` or one of the
``modules.core.exceptions`` errors.  Each request carries a fresh
correlation ID in ``X-Request-ID``, bound into the structlog context for
the duration of the call so every log line of that request shares it.
"""

from __future__ import annotations

import uuid
from typing import Any, Optional

import httpx
import structlog
from pydantic import BaseModel, ConfigDict

from storefront.config import settings
from storefront.modules.core.exceptions import (
    MalformedResponse,
    RemoteCallFailed,
    RemoteNotFound,
    SessionExpired,
)

logger = structlog.get_logger(__name__)

AUTH_LAPSE_STATUSES = frozenset({401, 403})


class RemoteResult(BaseModel):
    """Decoded successful envelope.  ``message`` is opaque display text."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str = ""
    data: Any = None


class ApiClient:
    """Thin async client over the storefront REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        access_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        token = settings.ACCESS_TOKEN if access_token is None else access_token
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=(base_url or settings.API_BASE_URL).rstrip("/"),
            timeout=settings.API_TIMEOUT if timeout is None else timeout,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str) -> RemoteResult:
        return await self.request("GET", url)

    async def post(self, url: str, payload: Optional[dict] = None) -> RemoteResult:
        return await self.request("POST", url, payload)

    async def put(self, url: str, payload: Optional[dict] = None) -> RemoteResult:
        return await self.request("PUT", url, payload)

    async def delete(self, url: str, payload: Optional[dict] = None) -> RemoteResult:
        return await self.request("DELETE", url, payload)

    async def request(
        self, method: str, url: str, payload: Optional[dict] = None
    ) -> RemoteResult:
        """Send one request and decode its envelope.

        Raises:
            SessionExpired: HTTP 401/403.
            RemoteNotFound: HTTP 404.
            MalformedResponse: a 2xx answer that is not an envelope.
            RemoteCallFailed: network error, other non-2xx, or ``success: false``.
        """
        cid = str(uuid.uuid4())
        with structlog.contextvars.bound_contextvars(correlation_id=cid):
            log = logger.bind(method=method, url=url)
            log.debug("api.request_started")
            try:
                response = await self._client.request(
                    method,
                    url,
                    json=payload,
                    headers={settings.CORRELATION_HEADER: cid},
                )
            except httpx.HTTPError as exc:
                log.warning("api.transport_error", error=str(exc))
                raise RemoteCallFailed(f"Network error: {exc}") from exc

            log = log.bind(status_code=response.status_code)
            body = _json_or_none(response)
            message = _message_of(body)

            if response.status_code in AUTH_LAPSE_STATUSES:
                log.warning("api.session_expired")
                raise SessionExpired(message or "Session expired, please log in again")

            if response.status_code == 404:
                log.info("api.not_found")
                raise RemoteNotFound(message or "Not found", status_code=404)

            if response.is_error:
                log.warning("api.request_failed", message=message)
                raise RemoteCallFailed(
                    message or f"Request failed with HTTP {response.status_code}",
                    status_code=response.status_code,
                )

            if not isinstance(body, dict):
                log.warning("api.malformed_envelope")
                raise MalformedResponse(
                    "Unexpected response from server",
                    status_code=response.status_code,
                )

            if not body.get("success") or body.get("error"):
                log.info("api.request_rejected", message=message)
                raise RemoteCallFailed(
                    message or "Request was not successful",
                    status_code=response.status_code,
                )

            log.debug("api.request_finished")
            return RemoteResult(success=True, message=message, data=body.get("data"))


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _message_of(body: Any) -> str:
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return ""
