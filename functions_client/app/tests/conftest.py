"""
Shared fixtures for the functions client tests.
"""

from typing import Any, Callable, Dict
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse

from functions_client.app.transport import HttpxTransport


def _build_functions_backend(
    functions: Dict[str, Callable[..., Any]],
    prefix: str = "",
) -> FastAPI:
    app = FastAPI()
    app.state.calls = []

    @app.post(f"{prefix}/functions/call")
    async def call_function(payload: Dict[str, Any] = Body(...)):
        app.state.calls.append(payload)
        name = payload.get("name")
        function = functions.get(name)
        if function is None:
            return JSONResponse(
                status_code=404,
                content={
                    "error": f"function not found: '{name}'",
                    "error_code": "FunctionNotFound",
                    "link": "http://testserver/logs",
                }
            )
        return function(*payload.get("arguments", []))

    return app


def _build_asgi_transport(app: FastAPI) -> HttpxTransport:
    client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    )
    return HttpxTransport(client=client)


@pytest.fixture
def create_functions_backend():
    """
    Factory for in-process servers answering POST {prefix}/functions/call.

    Received bodies are recorded in app.state.calls.
    """
    return _build_functions_backend


@pytest.fixture
def asgi_transport():
    """Factory for HttpxTransports talking to an ASGI app without a network"""
    return _build_asgi_transport


@pytest.fixture
def echo_transport():
    """Transport returning the body it was asked to send"""
    transport = AsyncMock()
    transport.fetch = AsyncMock(side_effect=lambda request: request.body)
    return transport


@pytest.fixture
def functions_backend():
    """Backend with a few arithmetic functions"""
    return _build_functions_backend({
        "sum": lambda *values: sum(values),
        "echo": lambda *values: list(values),
        "nothing": lambda: None,
    })
