"""
Pancake POS request dispatcher: one HTTP request per call, raw bytes in and out.

The client never parses or re-serializes payloads. Request bodies are sent
exactly as given and the response body is handed back untouched, whatever
the status code.
"""
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote
import time

import httpx

from pos_skills.errors import TransportError, UsageError
from pos_skills.utils.config import PosConfig
from pos_skills.utils.structured_logging import get_logger, redact_api_key

logger = get_logger(__name__)

USER_AGENT = "pancake-pos-skills/1.0"


@dataclass(frozen=True)
class PosRequest:
    method: str
    path: str
    query: str = ""
    body: Optional[bytes] = None


@dataclass(frozen=True)
class PosResponse:
    status_code: int
    content: bytes
    method: str = ""
    path: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def build_url(config: PosConfig, path: str, query: str = "") -> str:
    """
    Compose base_url + path + query and append the api_key parameter.

    The query is used verbatim (callers pass it with its leading '?'). The key
    goes before any #fragment so it stays in the query that is sent.
    """
    url, hash_mark, fragment = f"{config.base_url}{path}{query or ''}".partition("#")
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}api_key={quote(config.api_key, safe='')}{hash_mark}{fragment}"


class PosClient:
    """Thin async client for the Pancake POS REST API."""

    def __init__(self, config: PosConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport
        self.headers = {
            "accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def send(self, request: PosRequest) -> PosResponse:
        """
        Perform one request. No retries.

        Raises TransportError when the API cannot be reached. Non-2xx
        responses are returned, not raised.
        """
        url = build_url(self.config, request.path, request.query)
        try:
            httpx.URL(url)
        except httpx.InvalidURL as e:
            # base_url is validated by resolve_config, so the query is at fault
            raise UsageError(f"invalid query string {request.query!r}: {e}") from e

        headers = dict(self.headers)
        if request.body is not None:
            headers["Content-Type"] = "application/json"

        log = logger.bind(method=request.method, path=request.path)
        log.info(f"{request.method} {redact_api_key(url)}")

        started = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout, transport=self.transport) as client:
                response = await client.request(
                    request.method,
                    url,
                    content=request.body,
                    headers=headers,
                )
        except httpx.TransportError as e:
            log.error(f"Transport failure: {e!r}")
            raise TransportError(request.method, request.path, str(e) or type(e).__name__) from e

        duration_ms = int((time.monotonic() - started) * 1000)
        log.bind(status_code=response.status_code, duration_ms=duration_ms).info(
            f"HTTP {response.status_code} in {duration_ms}ms ({len(response.content)} bytes)"
        )
        return PosResponse(
            status_code=response.status_code,
            content=response.content,
            method=request.method,
            path=request.path,
        )

    async def request(
        self,
        method: str,
        path: str,
        query: str = "",
        body: Optional[bytes] = None,
    ) -> PosResponse:
        return await self.send(PosRequest(method=method, path=path, query=query, body=body))
