import asyncio
import threading
from typing import Any, Dict, Mapping, Optional

import httpx

from .config import DEFAULT_USERNAME, FORCED_GET_PARAMS, get_logger
from .core.encoding import (
    build_auth_headers,
    build_query_string,
    build_url,
    build_write_body,
    describe_params,
    normalize_params,
    parse_response_body,
    parse_retry_after,
)
from .exceptions import (
    InvalidParamsError,
    NetworkError,
    RateLimitedError,
    TimeoutError,
)
from .models import APIResult, RequestDescriptor

logger = get_logger("executor")

HTTP_METHODS = ("GET", "PUT", "POST", "DELETE")
RATE_LIMITED = 429


class RequestExecutor:
    """Issues one authenticated request per call against a Discourse forum.

    Every status other than 429 is returned as an ``APIResult``; 429 raises
    ``RateLimitedError`` and transport failures raise ``NetworkError`` or
    ``TimeoutError``. Nothing is retried.

    An ``httpx.AsyncClient`` is kept per event loop, since its connection
    pool cannot be shared across loops. Sync calls from several threads each
    get their own.

    ``sso_secret`` and the debug toggles are plain attributes. They may be
    changed after construction, but changing them while requests are in
    flight is unsupported; each request reads them once.
    """

    def __init__(
        self,
        host: str,
        api_key: Optional[str] = None,
        protocol: str = "https",
        timeout: float = 30,
        sso_secret: Optional[str] = None,
        default_username: str = DEFAULT_USERNAME,
        forced_get_params: Optional[Mapping[str, str]] = None,
        legacy_content_type: bool = False,
        debug_get: bool = False,
        debug_write: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if protocol not in ("http", "https"):
            raise ValueError("protocol must be 'http' or 'https'")
        if not host or not host.strip():
            raise ValueError("host cannot be empty")

        self.host = host.strip().rstrip("/")
        self.api_key = api_key
        self.protocol = protocol
        self.timeout = timeout
        self.sso_secret = sso_secret
        self.default_username = default_username
        self.forced_get_params: Dict[str, str] = dict(
            FORCED_GET_PARAMS if forced_get_params is None else forced_get_params
        )
        self.legacy_content_type = legacy_content_type
        self.debug_get = debug_get
        self.debug_write = debug_write

        self._transport = transport
        self._clients: Dict[asyncio.AbstractEventLoop, httpx.AsyncClient] = {}
        self._clients_lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}"

    @property
    def _client(self) -> httpx.AsyncClient:
        """The HTTP client bound to the running event loop."""
        loop = asyncio.get_running_loop()
        with self._clients_lock:
            client = self._clients.get(loop)
            if client is None or client.is_closed:
                for stale in [other for other in self._clients if other.is_closed()]:
                    del self._clients[stale]
                client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self.timeout), transport=self._transport
                )
                self._clients[loop] = client
            return client

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP client of this loop; schedule closes on other running loops.

        Clients bound to idle loops owned by other threads are dropped
        without a graceful close.
        """
        current = asyncio.get_running_loop()
        with self._clients_lock:
            clients = list(self._clients.items())
            self._clients.clear()

        for loop, client in clients:
            if loop is current:
                await client.aclose()
            elif loop.is_running():
                # not awaited: that loop may be blocked waiting on this one
                asyncio.run_coroutine_threadsafe(client.aclose(), loop)
            else:
                logger.debug("Dropping HTTP client of an idle event loop")

    async def get(
        self, path: str, params: Any = None, acting_user: Optional[str] = None
    ) -> APIResult:
        return await self.execute("GET", path, params, acting_user)

    async def put(
        self, path: str, params: Any = None, acting_user: Optional[str] = None
    ) -> APIResult:
        return await self.execute("PUT", path, params, acting_user)

    async def post(
        self, path: str, params: Any = None, acting_user: Optional[str] = None
    ) -> APIResult:
        return await self.execute("POST", path, params, acting_user)

    async def delete(
        self, path: str, params: Any = None, acting_user: Optional[str] = None
    ) -> APIResult:
        return await self.execute("DELETE", path, params, acting_user)

    def describe(
        self,
        method: str,
        path: str,
        params: Any = None,
        acting_user: Optional[str] = None,
    ) -> RequestDescriptor:
        """Validate the call and build its request descriptor."""
        verb = method.upper()
        if verb not in HTTP_METHODS:
            raise InvalidParamsError(
                f"Unsupported HTTP method: {method}", {"allowed": list(HTTP_METHODS)}
            )
        return RequestDescriptor(
            method=verb,
            path=path,
            params=normalize_params(params),
            acting_user=acting_user or self.default_username,
        )

    def build_request_kwargs(self, request: RequestDescriptor) -> Dict[str, Any]:
        """Build the keyword arguments handed to ``httpx.AsyncClient.request``."""
        headers = build_auth_headers(self.api_key, request.acting_user)

        if request.method == "GET":
            query = build_query_string(request.params, self.forced_get_params)
            return {
                "url": build_url(self.protocol, self.host, request.path, query),
                "headers": headers,
                "follow_redirects": True,
            }

        body = build_write_body(request.params, self.legacy_content_type)
        headers.update(body.pop("headers"))
        body.update(
            url=build_url(self.protocol, self.host, request.path),
            headers=headers,
            follow_redirects=False,
        )
        return body

    async def execute(
        self,
        method: str,
        path: str,
        params: Any = None,
        acting_user: Optional[str] = None,
    ) -> APIResult:
        """Perform one request and normalize the response.

        Args:
            method: GET, PUT, POST or DELETE
            path: Server-relative path including any ``.json`` suffix
            params: A FormFields, NestedGroup or FileUpload, or a legacy shape
                accepted by ``normalize_params``
            acting_user: Username sent as ``Api-Username``, defaults to the
                configured system identity

        Raises:
            RateLimitedError: The forum answered 429
            NetworkError: The connection failed
            TimeoutError: The forum did not answer in time
        """
        request = self.describe(method, path, params, acting_user)
        kwargs = self.build_request_kwargs(request)
        self._trace(request, kwargs)

        try:
            response = await self._client.request(request.method, **kwargs)
        except httpx.TimeoutException as e:
            raise TimeoutError(
                f"Request timed out: {request.method} {request.path}",
                {"path": request.path, "method": request.method},
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(
                f"Network error: {e}",
                {"path": request.path, "method": request.method},
            ) from e

        return self._normalize_response(request, response)

    def _normalize_response(
        self, request: RequestDescriptor, response: httpx.Response
    ) -> APIResult:
        status_code = response.status_code
        payload = parse_response_body(response.text)

        if status_code == RATE_LIMITED:
            retry_after = parse_retry_after(response.headers.get("Retry-After"))
            logger.warning(
                "Rate limited on %s %s (retry after %s)",
                request.method,
                request.path,
                retry_after,
            )
            raise RateLimitedError(
                "Rate limit",
                {"path": request.path, "method": request.method},
                retry_after=retry_after,
                payload=payload,
            )

        logger.debug("%s %s -> %s", request.method, request.path, status_code)
        return APIResult(status_code=status_code, payload=payload)

    def _trace(self, request: RequestDescriptor, kwargs: Dict[str, Any]) -> None:
        if request.method == "GET":
            if not self.debug_get:
                return
            logger.info(
                "user '%s' making %s request: %s, parameters: %s",
                request.acting_user,
                request.method,
                kwargs["url"],
                describe_params(request.params),
            )
            return

        if not self.debug_write:
            return
        if "content" in kwargs:
            body = kwargs["content"].decode("utf-8")
        else:
            body = describe_params(request.params)
        logger.info(
            "user '%s' making %s request: %s, parameters: %s - %s",
            request.acting_user,
            request.method,
            request.path,
            describe_params(request.params),
            body,
        )
