"""
HTTP Transport - httpx Backed Requests
=======================================

Sends function requests to the remote server with an httpx.AsyncClient.

Behavior:
---------
1. The request body is converted with pydantic_core.to_jsonable_python, so
   pydantic models, datetimes and UUIDs can be passed as arguments;
   UNDEFINED values nested anywhere in the body are left out
2. 2xx responses are decoded as JSON (an empty body decodes to None)
3. Other statuses raise FunctionCallError with the server's error details
4. httpx timeouts and network errors are raised as is

No retries are attempted here; callers that want them wrap the transport.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

import httpx
from pydantic_core import PydanticUndefined, to_jsonable_python

from ..errors import FunctionCallError
from ..models import FetchRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


def encode_body(value: Any) -> Any:
    """
    Convert a request body to JSON-compatible data.

    UNDEFINED mapping values are dropped at any depth and UNDEFINED list
    items become None, matching how JSON encoders treat undefined.
    """
    return to_jsonable_python(_strip_undefined(value))


def _strip_undefined(value: Any) -> Any:
    if value is PydanticUndefined:
        return None
    if isinstance(value, Mapping):
        return {
            key: _strip_undefined(item)
            for key, item in value.items()
            if item is not PydanticUndefined
        }
    if isinstance(value, (list, tuple)):
        return [_strip_undefined(item) for item in value]
    return value


class HttpxTransport:
    """
    Transport performing requests with httpx.

    Attributes:
        client: The httpx.AsyncClient requests are sent with
        headers: Headers added to every request
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Union[httpx.Timeout, float] = DEFAULT_TIMEOUT,
    ):
        """
        Initialize HttpxTransport.

        Args:
            base_url: Server base URL, used when no client is given
            client: Preconfigured client. It is not closed by aclose().
            headers: Extra headers sent with every request
            timeout: Timeout of the client created from base_url

        Raises:
            ValueError: If neither base_url nor client is given
        """
        if client is None:
            if not base_url:
                raise ValueError("Either base_url or client is required")
            client = httpx.AsyncClient(base_url=str(base_url), timeout=timeout)
            self._owns_client = True
        else:
            self._owns_client = False

        self.client = client
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if headers:
            self.headers.update(headers)

    async def fetch(self, request: FetchRequest) -> Any:
        """
        Send the request and decode the JSON response.

        Raises:
            FunctionCallError: If the server answers with a non-success status
            httpx.TimeoutException: If the request times out
            httpx.NetworkError: If the server cannot be reached
        """
        logger.debug(
            "Sending functions request",
            extra={"method": request.method, "path": request.path}
        )

        response = await self.client.request(
            request.method,
            request.path,
            json=encode_body(request.body),
            headers=self.headers,
        )

        if not response.is_success:
            logger.warning(
                f"Functions request failed: {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.path,
                    "status_code": response.status_code,
                }
            )
            raise FunctionCallError.from_response(response)

        if not response.content:
            return None
        return response.json()

    async def aclose(self) -> None:
        """Close the client if this transport created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<HttpxTransport {self.client.base_url}>"
