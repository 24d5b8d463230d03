"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from trafficsync.exceptions import (
    TrafficSimAPIError,
    TrafficSimConnectionError,
    TrafficSimTimeoutError,
    TrafficSimValidationError,
)

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0

_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


def _handle_response(response: httpx.Response) -> Any:
    """Validate response status and return parsed JSON."""
    if response.status_code >= 400:
        raise TrafficSimAPIError(
            status_code=response.status_code,
            message=response.text,
        )
    try:
        return response.json()
    except ValueError as exc:
        raise TrafficSimValidationError(f"Response is not valid JSON: {exc}") from exc


class SyncTransport:
    """Synchronous HTTP transport using httpx.Client."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.Client(base_url=base_url, timeout=timeout, headers=_HEADERS)

    def _send(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, endpoint, **kwargs)
        except httpx.ConnectError as exc:
            raise TrafficSimConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise TrafficSimTimeoutError(str(exc)) from exc
        return _handle_response(response)

    def get(self, endpoint: str) -> Any:
        """Perform a GET request and return parsed JSON."""
        return self._send("GET", endpoint)

    def post(self, endpoint: str, json: dict[str, Any]) -> Any:
        """Perform a POST request with a JSON body and return parsed JSON."""
        return self._send("POST", endpoint, json=json)

    def close(self) -> None:
        self._client.close()


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, headers=_HEADERS)

    async def _send(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, endpoint, **kwargs)
        except httpx.ConnectError as exc:
            raise TrafficSimConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise TrafficSimTimeoutError(str(exc)) from exc
        return _handle_response(response)

    async def get(self, endpoint: str) -> Any:
        """Perform an async GET request and return parsed JSON."""
        return await self._send("GET", endpoint)

    async def post(self, endpoint: str, json: dict[str, Any]) -> Any:
        """Perform an async POST request with a JSON body and return parsed JSON."""
        return await self._send("POST", endpoint, json=json)

    async def close(self) -> None:
        await self._client.aclose()
