"""
Transport interface and path-prefixing wrapper.
"""

from typing import Any, Protocol, runtime_checkable

from ..models import FetchRequest


@runtime_checkable
class Transport(Protocol):
    """
    Performs the actual request and returns the decoded response.

    Failures (network errors, non-success statuses, undecodable payloads)
    are raised by the transport and reach the caller unchanged.
    """

    async def fetch(self, request: FetchRequest) -> Any:
        ...


class PrefixTransport:
    """
    Prepends a fixed path prefix to every request of the wrapped transport.

    Used to scope calls to one application, e.g. with the prefix
    "/api/client/v2.0/app/my-app-id" a call to /functions/call is sent to
    /api/client/v2.0/app/my-app-id/functions/call.
    """

    def __init__(self, transport: Transport, path_prefix: str):
        prefix = path_prefix.strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = "/" + prefix
        self.transport = transport
        self.path_prefix = prefix

    async def fetch(self, request: FetchRequest) -> Any:
        return await self.transport.fetch(
            request.model_copy(update={"path": self.path_prefix + request.path})
        )

    def __repr__(self) -> str:
        return f"<PrefixTransport {self.path_prefix!r} -> {self.transport!r}>"
