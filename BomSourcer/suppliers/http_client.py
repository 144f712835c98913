"""
Outbound HTTP for supplier adapters.

Each adapter owns one aiohttp session, opened on first use. A request is tried
exactly once and never raises: transport errors, timeouts and non-2xx answers
all come back as an HTTPResponse with success=False, and the adapter decides
what that means for its results.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import aiohttp

logger = logging.getLogger(__name__)

# Error bodies are truncated to this many characters in HTTPResponse.error_message
MAX_ERROR_BODY = 500


def decode_json_body(text: Optional[str], supplier_name: str = "") -> Dict[str, Any]:
    """Decode a response body into a dict.

    A top-level list becomes {"items": [...]}, a scalar {"value": ...}, and an
    empty or non-JSON body {}.
    """
    if not text:
        return {}

    try:
        payload = json.loads(text)
    except ValueError as e:
        logger.warning(f"{supplier_name}: response body is not JSON ({e})")
        return {}

    if payload is None:
        return {}
    if isinstance(payload, dict):
        return payload
    if isinstance(payload, list):
        return {"items": payload}
    return {"value": payload}


@dataclass
class HTTPResponse:
    """Outcome of a single supplier request"""
    status: int
    data: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    url: str = ""
    duration_ms: int = 0
    success: bool = True
    error_message: Optional[str] = None

    @classmethod
    def failed(cls, url: str, error_message: str, status: int = 500) -> "HTTPResponse":
        """A request that produced no usable answer"""
        return cls(status=status, data={}, url=url, success=False, error_message=error_message)


class SupplierHTTPClient:
    """aiohttp session wrapper used by one supplier adapter"""

    def __init__(
        self,
        supplier_name: str,
        default_timeout: int = 30,
        default_headers: Optional[Dict[str, str]] = None
    ):
        self.supplier_name = supplier_name
        self.default_timeout = default_timeout
        self.default_headers = dict(default_headers or {})
        self._session: Optional[aiohttp.ClientSession] = None

    async def _session_for_request(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.default_timeout, sock_connect=10),
                headers=self.default_headers,
            )
        return self._session

    async def request(
        self,
        method: str,
        url: str,
        endpoint_type: str = "api_call",
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> HTTPResponse:
        """Send one request; endpoint_type only labels log lines"""
        request_headers = dict(self.default_headers)
        request_headers.update(headers or {})
        started = time.monotonic()

        try:
            session = await self._session_for_request()
            async with session.request(method, url, headers=request_headers, **kwargs) as response:
                body = await response.text()
        except Exception as e:
            logger.error(f"{self.supplier_name} {endpoint_type}: {method} {url} failed: {type(e).__name__}: {e}")
            return HTTPResponse.failed(url, f"{type(e).__name__}: {e}")

        duration_ms = int((time.monotonic() - started) * 1000)
        ok = 200 <= response.status < 300

        if ok:
            logger.debug(f"{self.supplier_name} {endpoint_type}: {method} {response.status} in {duration_ms}ms")
        else:
            logger.warning(f"{self.supplier_name} {endpoint_type}: {method} returned HTTP {response.status}")

        return HTTPResponse(
            status=response.status,
            data=decode_json_body(body, self.supplier_name),
            headers=dict(response.headers),
            url=str(response.url),
            duration_ms=duration_ms,
            success=ok,
            error_message=None if ok else (body or f"HTTP {response.status}")[:MAX_ERROR_BODY],
        )

    async def get(
        self,
        url: str,
        endpoint_type: str = "api_call",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> HTTPResponse:
        return await self.request("GET", url, endpoint_type, headers=headers, params=params)

    async def post(
        self,
        url: str,
        endpoint_type: str = "api_call",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None
    ) -> HTTPResponse:
        """POST a form (data) or a JSON body (json_data)"""
        return await self.request(
            "POST", url, endpoint_type, headers=headers, params=params, data=data, json=json_data
        )

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
            logger.debug(f"Closed HTTP session for {self.supplier_name}")
        self._session = None
