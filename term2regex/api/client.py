"""Async HTTP client for the term2regex conversion service.

WHY: Batch jobs and other services convert vocabulary lists through one
shared converter deployment. This client hides the HTTP details behind
two methods.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. ConverterClient is an
async context manager: enter it to open a connection pool, exit to close
it. convert() posts terms to /conversions, health() reads /health.

RULES:
- Always use the async context manager (async with ConverterClient(...) as client:)
- base_url defaults to TERM2REGEX_API_URL from the environment
- Non-2xx responses raise ConverterAPIError with status code and body
- Transport failures (refused, DNS, timeout) raise ConverterAPIError with
  status_code 0
- A custom httpx transport can be injected (used by tests)
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import httpx

DEFAULT_API_URL = os.getenv("TERM2REGEX_API_URL", "http://localhost:8000")


class ConverterAPIError(Exception):
    """Raised when the conversion service returns an error response.

    RULES:
    - Always include status_code and message
    - message is the response's "detail" field when present, else the body
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"term2regex API error {status_code}: {message}")


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return resp.text


class ConverterClient:
    """Async client for the conversion service.

    HOW: Wraps httpx.AsyncClient. Use as an async context manager to
    ensure the connection pool is closed.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or DEFAULT_API_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ConverterClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request, turning transport failures into ConverterAPIError."""
        client = self._ensure_client()
        try:
            resp = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ConverterAPIError(
                0, "cannot reach {}: {}".format(self._base_url, exc)
            ) from exc
        if resp.status_code != 200:
            raise ConverterAPIError(resp.status_code, _error_message(resp))
        return resp

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "ConverterClient must be used as an async context manager: "
                "async with ConverterClient() as client: ..."
            )
        return self._client

    async def convert(
        self,
        terms: List[str],
        config: Optional[Dict[str, Any]] = None,
    ) -> List[str]:
        """Convert terms remotely and return the regexes in input order.

        Args:
            terms: Terms to convert.
            config: Optional overrides (keys as in config_schema.json).

        Raises:
            ConverterAPIError: On a non-2xx response or a transport failure.
        """
        body: Dict[str, Any] = {"terms": list(terms)}
        if config:
            body["config"] = config

        resp = await self._request("POST", "/conversions", json=body)
        data = resp.json()
        return [item["regex"] for item in data["results"]]

    async def health(self) -> Dict[str, Any]:
        """Return the service's health payload."""
        resp = await self._request("GET", "/health")
        return resp.json()
