# clients.py
"""
Authenticated HTTP request layer for the Budbee API.

Encodes the credentials once, picks the production or staging host and
classifies every response by status code. Body parsing is left to the
endpoint methods in api_client.py.
"""

import asyncio
import base64
import logging
from typing import Any, Awaitable, Optional

import httpx

import config

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors raised by the request layer."""

    pass


class HTTPFailure(APIError):
    """Raised when the API answers with a status outside 200-399.

    The raw response is kept unparsed for the caller to inspect.
    """

    def __init__(self, response: httpx.Response):
        self.response = response
        super().__init__(
            f"{response.request.method} {response.request.url} "
            f"returned HTTP {response.status_code}"
        )

    @property
    def status_code(self) -> int:
        return self.response.status_code


class RequestCancelled(APIError):
    """Raised when a request is aborted through its cancellation signal."""

    pass


def is_success(status_code: int) -> bool:
    """Return True for statuses the API treats as success (200-399)."""
    return 200 <= status_code <= 399


class RESTClient:
    """
    Low-level authenticated client.

    Args:
        key: API key.
        secret: API secret.
        test: Target the staging host instead of production.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
    """

    def __init__(
        self,
        key: str,
        secret: str,
        test: bool = False,
        *,
        timeout: float = config.REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.test = bool(test)
        self.timeout = timeout
        self._transport = transport
        self._auth = base64.b64encode(f"{key}:{secret}".encode()).decode("ascii")

    @property
    def authorization(self) -> str:
        """Value of the Authorization header sent with every request."""
        return f"Basic {self._auth}"

    @property
    def base_url(self) -> str:
        return config.STAGING_URL if self.test else config.PRODUCTION_URL

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> httpx.Response:
        """
        Send one authenticated request.

        Args:
            method: HTTP verb.
            path: Path relative to the base URL, without leading slash.
            body: Pre-serialized JSON body.
            headers: Extra headers, applied over the Authorization header.
            params: URL query parameters.
            signal: Event that aborts the request when set.

        Returns:
            The raw response, body unparsed.

        Raises:
            HTTPFailure: If the status code is outside 200-399.
            RequestCancelled: If the signal is set before completion.
            httpx.RequestError: On transport failure.
        """
        url = f"{self.base_url}/{path}"
        # Caller headers are merged last and can replace Authorization.
        merged = {"Authorization": self.authorization, **(headers or {})}

        if signal is not None and signal.is_set():
            logger.info("%s %s cancelled before sending", method, url)
            raise RequestCancelled(f"{method} {url} cancelled")

        logger.debug("%s %s", method, url)
        send = self._send(method, url, merged, body, params)
        if signal is None:
            response = await send
        else:
            response = await self._race(send, signal, method, url)

        if not is_success(response.status_code):
            logger.warning(
                "%s %s returned HTTP %d", method, url, response.status_code
            )
            raise HTTPFailure(response)

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Optional[str],
        params: Optional[dict[str, str]],
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                return await client.request(
                    method, url, content=body, headers=headers, params=params
                )
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise

    async def _race(
        self,
        send: Awaitable[httpx.Response],
        signal: asyncio.Event,
        method: str,
        url: str,
    ) -> httpx.Response:
        """Run the request until it completes or the signal fires."""
        request_task = asyncio.ensure_future(send)
        signal_task = asyncio.ensure_future(signal.wait())
        try:
            await asyncio.wait(
                {request_task, signal_task}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            request_task.cancel()
            raise
        finally:
            signal_task.cancel()

        if not request_task.done():
            request_task.cancel()
            await asyncio.gather(request_task, return_exceptions=True)
            logger.info("%s %s cancelled", method, url)
            raise RequestCancelled(f"{method} {url} cancelled")
        return request_task.result()
