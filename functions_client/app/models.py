"""
Data Models Module

This module defines the Pydantic models exchanged between the functions
proxy and a transport:

- CallFunctionBody: the wire body of a single remote function call
- FetchRequest: the request descriptor handed to Transport.fetch()
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


CALL_FUNCTION_METHOD = "POST"
CALL_FUNCTION_PATH = "/functions/call"


# ============================================================================
# Function Call Models
# ============================================================================

class CallFunctionBody(BaseModel):
    """
    Body of a remote function call.

    Built fresh for every call and discarded once the transport returns.

    Attributes:
        name: Name of the remote function
        arguments: Positional arguments, already passed through the
                   configured argument transformation
        service: Name of the backend service, only set when the caller
                 is scoped to one
    """

    name: str = Field(..., description="Remote function name", min_length=1)
    arguments: List[Any] = Field(default_factory=list, description="Positional arguments")
    service: Optional[str] = Field(None, description="Backend service the function belongs to")

    def to_body(self) -> Dict[str, Any]:
        """
        Build the plain dict sent over the wire.

        The `service` key is left out entirely when no service is set;
        it is never sent as null or as an empty string.
        """
        body: Dict[str, Any] = {
            "name": self.name,
            "arguments": self.arguments,
        }
        if self.service:
            body["service"] = self.service
        return body


# ============================================================================
# Transport Models
# ============================================================================

class FetchRequest(BaseModel):
    """Request descriptor consumed by a transport."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: str = Field(default=CALL_FUNCTION_METHOD, description="HTTP method")
    path: str = Field(..., description="Path relative to the transport base URL")
    body: Any = Field(None, description="JSON-serializable request body")
