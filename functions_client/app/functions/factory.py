"""
Functions Factory - Remote Function Calls
==========================================

This module implements the object used to call remote functions by name.

Flow:
-----
1. `create()` builds a FunctionsFactory from a configuration and wraps it
   in a FunctionsProxy
2. `proxy.some_function(*args)` resolves to
   `factory.call_function("some_function", *args)`
3. The factory sanitizes the arguments, builds the call body and POSTs it
   to /functions/call through the configured transport
4. The decoded response is returned, optionally transformed

Reserved Names:
---------------
`inspect`, `callFunction` and `call_function` are never dispatched
remotely. A remote function with one of these names can only be called
with `proxy.call_function(name, ...)`.
"""

import functools
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import (
    CALL_FUNCTION_METHOD,
    CALL_FUNCTION_PATH,
    CallFunctionBody,
    FetchRequest,
)
from ..transport.base import Transport
from .sanitizer import clean_args

logger = logging.getLogger(__name__)

RESERVED_NAMES = ("inspect", "callFunction", "call_function")


# ============================================================================
# Configuration
# ============================================================================

class FunctionsFactoryConfiguration(BaseModel):
    """
    Configuration of a FunctionsFactory. Immutable once built.

    Fields accept both the snake_case names and the camelCase aliases
    (serviceName, argsTransformation, responseTransformation).

    Attributes:
        transport: Object exposing `async fetch(request: FetchRequest)`
        service_name: Backend service to scope calls to, empty for none
        args_transformation: Applied to the argument list before the call.
                             Defaults to clean_args; None disables it.
        response_transformation: Applied to the decoded response.
                                 None returns the response as is.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        populate_by_name=True,
    )

    transport: Any = Field(..., description="Transport performing the HTTP request")
    service_name: str = Field(default="", alias="serviceName")
    args_transformation: Optional[Callable[[List[Any]], List[Any]]] = Field(
        default=clean_args,
        alias="argsTransformation",
    )
    response_transformation: Optional[Callable[[Any], Any]] = Field(
        default=None,
        alias="responseTransformation",
    )

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: Any) -> Any:
        if not isinstance(v, Transport):
            raise ValueError("transport must expose an async fetch(request) operation")
        return v

    @field_validator("service_name", mode="before")
    @classmethod
    def validate_service_name(cls, v: Any) -> Any:
        """Treat a missing service name as unscoped"""
        return "" if v is None else v


# ============================================================================
# Factory
# ============================================================================

class FunctionsFactory:
    """
    Calls remote functions through a single transport.

    Holds no state between calls besides the immutable configuration, so
    one instance can serve any number of overlapping calls.
    """

    def __init__(self, config: Optional[FunctionsFactoryConfiguration] = None, **options: Any):
        """
        Initialize FunctionsFactory.

        Args:
            config: Prebuilt configuration
            **options: Configuration fields, used when config is not given
        """
        if config is None:
            config = FunctionsFactoryConfiguration(**options)
        elif options:
            raise TypeError("Pass either a configuration or keyword options, not both")
        self._config = config

    @property
    def config(self) -> FunctionsFactoryConfiguration:
        return self._config

    async def call_function(self, name: str, *args: Any) -> Any:
        """
        Call a remote function by its name.

        Args:
            name: Name of the remote function
            *args: Arguments passed to the remote function

        Returns:
            The decoded response, passed through the response
            transformation when one is configured

        Raises:
            ValueError: If name is not a non-empty string
            Exception: Whatever the transport raised, unchanged
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Function name must be a non-empty string")

        config = self._config
        arguments = list(args)
        if config.args_transformation is not None:
            arguments = config.args_transformation(arguments)

        body = CallFunctionBody(
            name=name,
            arguments=arguments,
            service=config.service_name or None,
        )

        logger.debug(
            "Calling remote function",
            extra={
                "function_name": name,
                "service": config.service_name or None,
                "argument_count": len(arguments),
            }
        )

        response = await config.transport.fetch(
            FetchRequest(
                method=CALL_FUNCTION_METHOD,
                path=CALL_FUNCTION_PATH,
                body=body.to_body(),
            )
        )

        if config.response_transformation is not None:
            return config.response_transformation(response)
        return response

    # Same operation under its camelCase name
    callFunction = call_function

    def inspect(self) -> Dict[str, Any]:
        """Describe the configuration without exposing the transport itself."""
        config = self._config
        return {
            "service_name": config.service_name or None,
            "transport": type(config.transport).__name__,
            "args_transformation": _callable_name(config.args_transformation),
            "response_transformation": _callable_name(config.response_transformation),
        }

    def __repr__(self) -> str:
        return f"<FunctionsFactory service={self._config.service_name!r}>"


def _callable_name(func: Optional[Callable]) -> Optional[str]:
    if func is None:
        return None
    return getattr(func, "__qualname__", None) or repr(func)


# ============================================================================
# Proxy
# ============================================================================

class FunctionsProxy:
    """
    Turns attribute access into remote function calls.

    `proxy.name(*args)` calls the remote function `name`. Reserved names
    and names starting with an underscore resolve on the wrapped factory
    instead. Item access (`proxy["some-name"]`) reaches functions whose
    names are not valid identifiers.

    Names are not checked against the server; an unknown function only
    fails when it is called.
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: FunctionsFactory):
        self._factory = factory

    def __getattr__(self, name: str) -> Any:
        if name == "_factory":
            raise AttributeError(name)
        if name.startswith("_") or name in RESERVED_NAMES:
            return getattr(self._factory, name)
        return functools.partial(self._factory.call_function, name)

    def __getitem__(self, name: str) -> Any:
        if not isinstance(name, str):
            raise TypeError(f"Function names must be strings, not {type(name).__name__}")
        if name in RESERVED_NAMES:
            return getattr(self._factory, name)
        return functools.partial(self._factory.call_function, name)

    def __repr__(self) -> str:
        return f"<FunctionsProxy for {self._factory!r}>"


def create(config: Optional[FunctionsFactoryConfiguration] = None, **options: Any) -> FunctionsProxy:
    """
    Create a proxy calling remote functions by attribute name.

    Args:
        config: Prebuilt configuration
        **options: Configuration fields (transport, service_name,
                   args_transformation, response_transformation)

    Returns:
        FunctionsProxy wrapping a new FunctionsFactory

    Example:
        >>> functions = create(transport=transport, service_name="billing")
        >>> total = await functions.sum_invoices(2024, {"currency": "EUR"})
    """
    return FunctionsProxy(FunctionsFactory(config, **options))
