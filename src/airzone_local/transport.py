"""Rate-limited HTTP transport to the bridge's local API."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import aiohttp

from .const import API_PATH, DEFAULT_PORT, DEFAULT_TIMEOUT, REQUEST_SPACING
from .exceptions import AirzoneConnectionError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

_LOGGER = logging.getLogger(__name__)

_HEADERS = {"Content-Type": "application/json"}


class RateLimiter:
    """
    Serialize requests to one bridge and space them apart.

    The embedded web server of the bridge is easily overwhelmed, so only one
    request may be in flight and the next one waits until ``spacing`` seconds
    after the previous one completed, whether it succeeded or not.
    Waiters are served in the order they reached the lock.
    """

    def __init__(self, spacing: float = REQUEST_SPACING) -> None:
        self._spacing = spacing
        self._lock = asyncio.Lock()
        self._next_call_not_before: float | None = None

    @property
    def spacing(self) -> float:
        """Return the minimum delay between two requests, in seconds."""
        return self._spacing

    @property
    def next_call_not_before(self) -> float | None:
        """Return the loop time before which no request may start."""
        return self._next_call_not_before

    @contextlib.asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold exclusive access to the bridge for one request."""
        async with self._lock:
            loop = asyncio.get_running_loop()
            if self._next_call_not_before is not None:
                # sleep() may wake up a clock tick early, hence the loop
                while (wait := self._next_call_not_before - loop.time()) > 0:
                    _LOGGER.debug("Waiting %.2fs before next request", wait)
                    await asyncio.sleep(wait)
            try:
                yield
            finally:
                self._next_call_not_before = loop.time() + self._spacing


class BridgeTransport:
    """
    Issue POST/PUT requests to ``http://<host>:<port>/api/v1/<resource>``.

    All requests go through one RateLimiter. Failures raise
    AirzoneConnectionError and are never retried here.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limiter: RateLimiter | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._host = host
        self._port = port
        self._timeout = timeout
        self._rate_limiter = rate_limiter or RateLimiter()
        self._session = session
        self._owns_session = session is None
        self._last_communication: datetime | None = None
        self._last_successful_communication: datetime | None = None
        self._online = False

    @property
    def base_url(self) -> str:
        """Return the URL prefix of every API resource."""
        return f"http://{self._host}:{self._port}{API_PATH}"

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    @property
    def last_communication(self) -> datetime | None:
        """Return when the last request was attempted."""
        return self._last_communication

    @property
    def last_successful_communication(self) -> datetime | None:
        """Return when a request last succeeded."""
        return self._last_successful_communication

    @property
    def online(self) -> bool:
        """Return True if the last request succeeded."""
        return self._online

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def execute(self, method: str, resource: str, body: bytes | str = b"") -> str:
        """
        Send one request and return the response body.

        Args:
            method: "POST" or "PUT".
            resource: Resource name under /api/v1/, e.g. "hvac".
            body: JSON request body.

        Raises:
            AirzoneConnectionError: On network errors, timeouts or a
                non-2xx status.

        """
        url = f"{self.base_url}{resource}"
        data = body.encode() if isinstance(body, str) else body
        async with self._rate_limiter.slot():
            self._last_communication = datetime.now(UTC)
            self._online = False
            _LOGGER.debug("[>] %s %s %r", method, url, data)
            try:
                async with self._get_session().request(
                    method,
                    url,
                    data=data,
                    headers=_HEADERS,
                    timeout=aiohttp.ClientTimeout(total=self._timeout),
                ) as response:
                    raw = await response.read()
                    status = response.status
            except TimeoutError as exc:
                raise AirzoneConnectionError(
                    f"{method} {url} timed out after {self._timeout}s"
                ) from exc
            except aiohttp.ClientError as exc:
                raise AirzoneConnectionError(f"{method} {url} failed: {exc!r}") from exc
            if not 200 <= status < 300:  # noqa: PLR2004
                raise AirzoneConnectionError(f"{method} {url} returned HTTP {status}")
            self._last_successful_communication = self._last_communication
            self._online = True
        text = raw.decode("utf-8", errors="replace")
        _LOGGER.debug("[<] %d bytes: %s", len(raw), text[:200])
        return text

    async def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
        self._session = None
