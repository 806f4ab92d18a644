"""
Argument sanitization applied before a function call is serialized.
"""

from collections.abc import MutableMapping
from typing import Any, List

from pydantic_core import PydanticUndefined

# Marks a field as "not provided". Such fields are dropped from the call
# instead of being sent as null.
UNDEFINED = PydanticUndefined


def clean_args(args: List[Any]) -> List[Any]:
    """
    Remove every UNDEFINED-valued key from mapping arguments.

    Mappings are edited in place and the same list is returned, so the
    caller's dicts lose those keys too. None is a real value and is kept.

    Args:
        args: Positional arguments of a function call

    Returns:
        The same list object
    """
    for arg in args:
        if isinstance(arg, MutableMapping):
            for key in [key for key, value in arg.items() if value is UNDEFINED]:
                del arg[key]
    return args
