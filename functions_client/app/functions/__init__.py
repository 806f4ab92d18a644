"""
Functions Package
=================

Calls remote functions through attribute access on a proxy object.

Main Components:
----------------
- sanitizer.py: clean_args, drops UNDEFINED fields from mapping arguments
- factory.py: FunctionsFactory, FunctionsProxy and the create() factory

Usage:
------
    from functions_client.app.functions import create
    functions = create(transport=transport)
    result = await functions.hello("world")
"""

from .factory import (
    RESERVED_NAMES,
    FunctionsFactory,
    FunctionsFactoryConfiguration,
    FunctionsProxy,
    create,
)
from .sanitizer import UNDEFINED, clean_args

__all__ = [
    "RESERVED_NAMES",
    "UNDEFINED",
    "FunctionsFactory",
    "FunctionsFactoryConfiguration",
    "FunctionsProxy",
    "clean_args",
    "create",
]
