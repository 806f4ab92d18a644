"""
Transport Package
=================

Transports perform the network request behind a function call.

Main Components:
----------------
- base.py: Transport protocol and PrefixTransport
- http.py: HttpxTransport, an httpx.AsyncClient based transport

Usage:
------
    from functions_client.app.transport import HttpxTransport
    transport = HttpxTransport(base_url="https://functions.example.com")
"""

from .base import PrefixTransport, Transport
from .http import HttpxTransport

__all__ = ["HttpxTransport", "PrefixTransport", "Transport"]
