"""
Client Errors
=============

Exceptions raised by the bundled transports. The functions proxy itself
never raises or wraps these; it lets whatever the transport raised reach
the caller untouched.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class FunctionsClientError(Exception):
    """Base exception for functions client errors"""
    pass


class FunctionCallError(FunctionsClientError):
    """
    A remote function call answered with a non-success status.

    Attributes:
        status_code: HTTP status code of the response
        error: Error message reported by the server (or the reason phrase)
        error_code: Machine readable error code, if the server sent one
        link: Link to server side logs, if the server sent one
        method: HTTP method of the failed request
        url: URL of the failed request
    """

    def __init__(
        self,
        status_code: int,
        error: str,
        error_code: Optional[str] = None,
        link: Optional[str] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.status_code = status_code
        self.error = error
        self.error_code = error_code
        self.link = link
        self.method = method
        self.url = url

        target = f"{method} {url}" if method and url else "request"
        message = f"{target} failed with status {status_code}: {error}"
        if error_code:
            message += f" (error_code: {error_code})"
        super().__init__(message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "FunctionCallError":
        """
        Build an error from a non-success httpx response.

        The server is expected to answer with a JSON object shaped like
        {"error": "...", "error_code": "...", "link": "..."}; any other
        body falls back to the reason phrase.
        """
        payload: Dict[str, Any] = {}
        try:
            decoded = response.json()
            if isinstance(decoded, dict):
                payload = decoded
        except ValueError:
            logger.debug("Error response body is not JSON", extra={"status_code": response.status_code})

        try:
            method: Optional[str] = response.request.method
            url: Optional[str] = str(response.request.url)
        except RuntimeError:
            # Response was built without a request
            method, url = None, None

        return cls(
            status_code=response.status_code,
            error=payload.get("error") or response.reason_phrase or "Unknown error",
            error_code=payload.get("error_code"),
            link=payload.get("link"),
            method=method,
            url=url,
        )
