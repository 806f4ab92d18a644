"""
Unit Tests for the Functions Factory and Proxy
==============================================

Tests for functions_client/app/functions/factory.py

Test Coverage:
--------------
1. Call body construction (name, arguments, optional service)
2. Argument and response transformations
3. Attribute dispatch, reserved names and item access
4. Transport failures reaching the caller unchanged
5. Configuration validation and immutability

Run tests:
----------
    pytest functions_client/app/tests/test_functions.py -v
"""

import asyncio
import functools
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from functions_client.app.functions import (
    RESERVED_NAMES,
    UNDEFINED,
    FunctionsFactory,
    FunctionsFactoryConfiguration,
    FunctionsProxy,
    clean_args,
    create,
)
from functions_client.app.models import FetchRequest


# ============================================================================
# Call Body Tests
# ============================================================================

@pytest.mark.asyncio
async def test_call_sends_name_and_cleaned_arguments(echo_transport):
    functions = create(transport=echo_transport)

    body = await functions.foo(1, {"a": 1, "b": UNDEFINED})

    assert body == {"name": "foo", "arguments": [1, {"a": 1}]}
    assert "service" not in body


@pytest.mark.asyncio
async def test_call_posts_to_functions_call(echo_transport):
    functions = create(transport=echo_transport)

    await functions.foo()

    request = echo_transport.fetch.call_args.args[0]
    assert isinstance(request, FetchRequest)
    assert request.method == "POST"
    assert request.path == "/functions/call"
    assert request.body == {"name": "foo", "arguments": []}
    echo_transport.fetch.assert_awaited_once()


@pytest.mark.asyncio
async def test_service_name_is_included_when_configured(echo_transport):
    functions = create(transport=echo_transport, service_name="billing")

    body = await functions.totals(2024)

    assert body == {"name": "totals", "arguments": [2024], "service": "billing"}


@pytest.mark.asyncio
@pytest.mark.parametrize("service_name", ["", None])
async def test_empty_service_name_is_omitted(echo_transport, service_name):
    functions = create(transport=echo_transport, service_name=service_name)

    body = await functions.totals()

    assert "service" not in body


@pytest.mark.asyncio
async def test_caller_dicts_are_cleaned_in_place(echo_transport):
    functions = create(transport=echo_transport)
    options = {"limit": 10, "cursor": UNDEFINED}

    await functions.list_items(options)

    assert options == {"limit": 10}


@pytest.mark.asyncio
async def test_call_function_and_attribute_access_send_identical_bodies(echo_transport):
    functions = create(transport=echo_transport)

    via_attribute = await functions.foo(1, 2)
    via_camel_case = await functions.callFunction("foo", 1, 2)
    via_snake_case = await functions.call_function("foo", 1, 2)

    assert via_attribute == via_camel_case == via_snake_case
    assert via_attribute == {"name": "foo", "arguments": [1, 2]}


@pytest.mark.asyncio
async def test_concurrent_calls_are_independent(echo_transport):
    functions = create(transport=echo_transport, service_name="svc")

    bodies = await asyncio.gather(*(functions.square(n) for n in range(5)))

    assert [body["arguments"] for body in bodies] == [[n] for n in range(5)]
    assert all(body["service"] == "svc" for body in bodies)


# ============================================================================
# Transformation Tests
# ============================================================================

@pytest.mark.asyncio
async def test_response_transformation_is_applied():
    transport = AsyncMock()
    transport.fetch = AsyncMock(return_value={"value": 42})
    functions = create(
        transport=transport,
        response_transformation=lambda response: response["value"],
    )

    assert await functions.foo() == 42


@pytest.mark.asyncio
async def test_response_is_returned_verbatim_without_transformation():
    response = {"value": 42, "extra": [1, 2]}
    transport = AsyncMock()
    transport.fetch = AsyncMock(return_value=response)
    functions = create(transport=transport)

    assert await functions.foo() is response


@pytest.mark.asyncio
async def test_disabled_args_transformation_passes_arguments_through(echo_transport):
    functions = create(transport=echo_transport, args_transformation=None)
    options = {"a": 1, "b": UNDEFINED}

    body = await functions.foo(options)

    assert body["arguments"] == [{"a": 1, "b": UNDEFINED}]
    assert options == {"a": 1, "b": UNDEFINED}


@pytest.mark.asyncio
async def test_custom_args_transformation_replaces_default(echo_transport):
    functions = create(
        transport=echo_transport,
        args_transformation=lambda args: [len(args)] + args,
    )

    body = await functions.foo("x", "y")

    assert body["arguments"] == [2, "x", "y"]


@pytest.mark.asyncio
async def test_camel_case_options_are_accepted(echo_transport):
    functions = create(
        transport=echo_transport,
        serviceName="billing",
        responseTransformation=lambda body: body["service"],
    )

    assert await functions.foo() == "billing"


# ============================================================================
# Error Propagation Tests
# ============================================================================

@pytest.mark.asyncio
async def test_transport_error_propagates_unchanged():
    error = ConnectionError("backend unreachable")
    transport = AsyncMock()
    transport.fetch = AsyncMock(side_effect=error)
    response_transformation = AsyncMock()
    functions = create(transport=transport, response_transformation=response_transformation)

    with pytest.raises(ConnectionError) as exc_info:
        await functions.anything()

    assert exc_info.value is error
    response_transformation.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", 42, None])
async def test_invalid_function_name_is_rejected_before_fetch(echo_transport, name):
    factory = FunctionsFactory(transport=echo_transport)

    with pytest.raises(ValueError):
        await factory.call_function(name)

    echo_transport.fetch.assert_not_called()


# ============================================================================
# Proxy Dispatch Tests
# ============================================================================

def test_attribute_access_returns_bound_call(echo_transport):
    functions = create(transport=echo_transport)

    foo = functions.foo

    assert isinstance(foo, functools.partial)
    assert foo.args == ("foo",)
    assert foo.func == functions.call_function


def test_factory_attributes_are_not_exposed_through_proxy(echo_transport):
    """Only reserved names reach the factory; everything else is remote"""
    functions = create(transport=echo_transport)

    assert isinstance(functions.config, functools.partial)
    assert functions.config.args == ("config",)


@pytest.mark.parametrize("name", RESERVED_NAMES)
def test_reserved_names_resolve_on_factory(echo_transport, name):
    functions = create(transport=echo_transport)

    assert not isinstance(getattr(functions, name), functools.partial)
    assert getattr(functions, name) == getattr(functions._factory, name)


def test_inspect_describes_configuration(echo_transport):
    functions = create(transport=echo_transport, service_name="billing")

    description = functions.inspect()

    assert description == {
        "service_name": "billing",
        "transport": "AsyncMock",
        "args_transformation": "clean_args",
        "response_transformation": None,
    }


def test_underscore_names_use_normal_lookup(echo_transport):
    functions = create(transport=echo_transport)

    assert functions.__class__ is FunctionsProxy
    with pytest.raises(AttributeError):
        functions._not_there
    with pytest.raises(AttributeError):
        functions.__not_there__


@pytest.mark.asyncio
async def test_item_access_calls_functions_with_any_name(echo_transport):
    functions = create(transport=echo_transport)

    body = await functions["do-something"](1)

    assert body == {"name": "do-something", "arguments": [1]}


def test_item_access_keeps_reserved_names(echo_transport):
    functions = create(transport=echo_transport)

    assert functions["callFunction"] == functions._factory.callFunction


def test_item_access_rejects_non_string_keys(echo_transport):
    functions = create(transport=echo_transport)

    with pytest.raises(TypeError):
        functions[0]


def test_repr_mentions_service(echo_transport):
    functions = create(transport=echo_transport, service_name="billing")

    assert "billing" in repr(functions)


# ============================================================================
# Configuration Tests
# ============================================================================

def test_configuration_defaults(echo_transport):
    config = FunctionsFactoryConfiguration(transport=echo_transport)

    assert config.service_name == ""
    assert config.args_transformation is clean_args
    assert config.response_transformation is None


def test_configuration_is_immutable(echo_transport):
    config = FunctionsFactoryConfiguration(transport=echo_transport)

    with pytest.raises(ValidationError):
        config.service_name = "other"


def test_configuration_requires_transport_with_fetch():
    with pytest.raises(ValidationError):
        FunctionsFactoryConfiguration(transport=object())


@pytest.mark.asyncio
async def test_factory_accepts_prebuilt_configuration(echo_transport):
    config = FunctionsFactoryConfiguration(transport=echo_transport, service_name="svc")
    functions = create(config)

    assert functions.inspect()["service_name"] == "svc"
    assert (await functions.foo())["service"] == "svc"


def test_factory_rejects_configuration_and_options_together(echo_transport):
    config = FunctionsFactoryConfiguration(transport=echo_transport)

    with pytest.raises(TypeError):
        FunctionsFactory(config, service_name="svc")
