"""
Functions Client
================

Calls remote functions over HTTP through a proxy object whose attributes
are the remote functions:

    from functions_client.app import HttpxTransport, create

    transport = HttpxTransport(base_url="https://functions.example.com")
    functions = create(transport=transport, service_name="billing")
    total = await functions.sum_invoices(2024)

Each call is sent as POST /functions/call with the body
{"name": ..., "arguments": [...], "service": ...}.
"""

from .errors import FunctionCallError, FunctionsClientError
from .functions import (
    RESERVED_NAMES,
    UNDEFINED,
    FunctionsFactory,
    FunctionsFactoryConfiguration,
    FunctionsProxy,
    clean_args,
    create,
)
from .models import CallFunctionBody, FetchRequest
from .transport import HttpxTransport, PrefixTransport, Transport

__all__ = [
    "RESERVED_NAMES",
    "UNDEFINED",
    "CallFunctionBody",
    "FetchRequest",
    "FunctionCallError",
    "FunctionsClientError",
    "FunctionsFactory",
    "FunctionsFactoryConfiguration",
    "FunctionsProxy",
    "HttpxTransport",
    "PrefixTransport",
    "Transport",
    "clean_args",
    "create",
]
