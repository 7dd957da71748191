"""
Upstream Payment API Service

Forwards requests to the upstream payment API with injected credentials and
relays the response. Failures are raised as UpstreamException so every route
reports them with the same shape.
"""

from typing import Any, List, Mapping, Optional, Tuple, Union

import httpx
from fastapi import Request
from fastapi.responses import Response

from payment_proxy.config import UpstreamConfig
from payment_proxy.headers import build_upstream_headers
from payment_proxy.utils.exceptions import UpstreamException
from payment_proxy.utils.logging_config import get_logger

logger = get_logger(__name__)

QueryParams = Union[Mapping[str, Any], List[Tuple[str, str]], None]


class UpstreamService:
    """
    Service for forwarding calls to the upstream payment API.

    A single httpx.AsyncClient is shared by all requests of the application
    and closed on shutdown.
    """

    def __init__(
        self,
        config: UpstreamConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create the shared httpx AsyncClient"""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                transport=self._transport,
                follow_redirects=True,
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
        self._http_client = None

    async def forward(
        self,
        method: str,
        path: str,
        inbound_headers: Mapping[str, str],
        params: QueryParams = None,
        json_body: Any = None,
    ) -> Response:
        """
        Forward a call to the upstream API and relay its response.

        Args:
            method: HTTP method
            path: Path relative to the upstream base URL
            inbound_headers: Headers of the inbound request (for Origin/Referer)
            params: Query parameters, forwarded verbatim
            json_body: JSON body for write operations

        Returns:
            Response carrying the upstream status, body and content type

        Raises:
            UpstreamException: On network errors or non-2xx responses
        """
        url = self.config.url_for(path)
        headers = build_upstream_headers(inbound_headers, self.config)
        client = self._get_http_client()

        try:
            response = await client.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_body,
            )
        except httpx.RequestError as e:
            message = str(e) or type(e).__name__
            logger.error(
                f"API request error: {message}",
                extra={"method": method, "path": path, "error_type": type(e).__name__},
            )
            raise UpstreamException(
                message,
                details={"method": method, "path": path},
            ) from e

        if not response.is_success:
            message = f"Request failed with status code {response.status_code}"
            logger.error(
                f"API request error: {message}",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                },
            )
            raise UpstreamException(
                message,
                status_code=response.status_code,
                body=_decode_body(response),
                details={"method": method, "path": path},
            )

        logger.debug(
            "Upstream request completed",
            extra={"method": method, "path": path, "status_code": response.status_code},
        )

        return Response(
            content=response.content,
            status_code=response.status_code,
            media_type=response.headers.get("content-type"),
        )


def _decode_body(response: httpx.Response) -> Any:
    """Parsed JSON body when possible, raw text otherwise"""
    try:
        return response.json()
    except ValueError:
        return response.text


def get_upstream_service(request: Request) -> UpstreamService:
    """FastAPI dependency returning the application's upstream service"""
    return request.app.state.upstream_service
