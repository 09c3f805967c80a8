"""HTTP transport primitives for the ingredient REST resource."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .exceptions import EntityNotFoundError, TransportError

LOGGER = logging.getLogger(__name__)


class WebClient:
    """Thin async wrapper over ``httpx.AsyncClient``.

    Paths are relative to ``{base_url}/{api_prefix}/``. Responses wrapped in a
    ``{"data": ...}`` envelope are unwrapped; bare JSON values are returned as-is.
    Every failure surfaces as :class:`TransportError`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_prefix: str = "api",
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        prefix = api_prefix.strip("/")
        root = base_url.rstrip("/")
        self.base_url = f"{root}/{prefix}/" if prefix else f"{root}/"
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout)
        )

    def url_for(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post(self, path: str, data: dict[str, Any]) -> Any:
        return await self._request("POST", path, data)

    async def patch(self, path: str, data: dict[str, Any]) -> Any:
        return await self._request("PATCH", path, data)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def aclose(self) -> None:
        """Close the underlying HTTP client when this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self, method: str, path: str, data: dict[str, Any] | None = None
    ) -> Any:
        url = self.url_for(path)
        try:
            response = await self._client.request(method, url, json=data)
        except httpx.HTTPError as exc:
            LOGGER.warning(
                "web.request.failed",
                extra={
                    "event": "web.request.failed",
                    "method": method,
                    "url": url,
                    "error_type": type(exc).__name__,
                },
            )
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if response.status_code == 404:
            raise EntityNotFoundError(
                f"{method} {url} returned 404", status_code=response.status_code
            )
        if not response.is_success:
            LOGGER.warning(
                "web.request.status",
                extra={
                    "event": "web.request.status",
                    "method": method,
                    "url": url,
                    "status_code": response.status_code,
                },
            )
            raise TransportError(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(
                f"{method} {url} returned invalid JSON",
                status_code=response.status_code,
            ) from exc

        LOGGER.debug(
            "web.request.ok",
            extra={
                "event": "web.request.ok",
                "method": method,
                "url": url,
                "status_code": response.status_code,
            },
        )
        if isinstance(payload, dict) and set(payload) == {"data"}:
            return payload["data"]
        return payload
