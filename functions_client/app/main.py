"""
Functions Client Wiring
=======================

Builds a functions proxy from environment settings and provides a small
command line entry point for calling one remote function.

Environment Variables:
    - FUNCTIONS_BASE_URL: Server base URL (required)
    - FUNCTIONS_PATH_PREFIX: Path prepended to every request
    - FUNCTIONS_SERVICE_NAME: Backend service to scope calls to
    - FUNCTIONS_TIMEOUT_SECONDS / FUNCTIONS_CONNECT_TIMEOUT_SECONDS
    - LOG_LEVEL: Logging level (default: INFO)

Calling a Function:
    python -m functions_client.app.main sum '[1, 2, 3]'
    FUNCTIONS_SERVICE_NAME=billing python -m functions_client.app.main totals '{"year": 2024}'

Each extra command line argument is parsed as JSON and passed positionally.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional, TextIO

import httpx

from .config import Settings, get_settings
from .errors import FunctionsClientError
from .functions import FunctionsProxy, create
from .transport import HttpxTransport, PrefixTransport, Transport

logger = logging.getLogger("functions_client.main")


LOG_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)


def setup_logging(log_level: str = "INFO", stream: TextIO = sys.stderr) -> None:
    """
    Send JSON-line logs to stream.

    Logs go to stderr by default so command line results on stdout stay
    parseable.
    """
    logging.basicConfig(
        level=log_level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(stream)],
    )


def create_http_transport(settings: Settings) -> HttpxTransport:
    """Create an httpx transport for the configured base URL."""
    return HttpxTransport(
        base_url=settings.base_url_str,
        timeout=settings.http_timeout,
    )


def create_functions(
    settings: Optional[Settings] = None,
    transport: Optional[Transport] = None,
    **options: Any
) -> FunctionsProxy:
    """
    Create a functions proxy configured from settings.

    Args:
        settings: Settings to use, defaults to get_settings()
        transport: Transport to use, defaults to an HttpxTransport for
                   FUNCTIONS_BASE_URL
        **options: Extra configuration (args_transformation,
                   response_transformation, service_name overrides)

    Returns:
        FunctionsProxy
    """
    settings = settings or get_settings()
    if transport is None:
        transport = create_http_transport(settings)
    if settings.FUNCTIONS_PATH_PREFIX:
        transport = PrefixTransport(transport, settings.FUNCTIONS_PATH_PREFIX)

    if "service_name" not in options and "serviceName" not in options:
        options["service_name"] = settings.FUNCTIONS_SERVICE_NAME

    logger.info(
        "Created functions proxy",
        extra={
            "base_url": settings.base_url_str,
            "path_prefix": settings.FUNCTIONS_PATH_PREFIX,
            "service": options.get("service_name") or options.get("serviceName") or None,
        }
    )
    return create(transport=transport, **options)


async def call_from_command_line(name: str, raw_arguments: List[str], settings: Settings) -> Any:
    """Call one remote function with JSON encoded arguments."""
    arguments = [json.loads(raw) for raw in raw_arguments]
    async with create_http_transport(settings) as transport:
        functions = create_functions(settings, transport=transport)
        return await functions.call_function(name, *arguments)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="functions_client",
        description="Call a remote function and print its JSON result",
    )
    parser.add_argument("name", help="Name of the remote function")
    parser.add_argument("arguments", nargs="*", help="JSON encoded positional arguments")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    try:
        result = asyncio.run(call_from_command_line(args.name, args.arguments, settings))
    except json.JSONDecodeError as e:
        parser.error(f"arguments must be valid JSON: {e}")
    except (FunctionsClientError, httpx.HTTPError) as e:
        logger.error(
            f"Function call failed: {e}",
            extra={"function_name": args.name, "exception_type": type(e).__name__}
        )
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
