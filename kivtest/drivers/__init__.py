"""
Backend Client Abstraction Layer.

Provides a unified interface for talking to different database backends:
- CouchDB-compatible servers over HTTP
- In-memory backend for running without a server
- Filesystem backend storing databases as directories

The factory function `create_client()` returns the appropriate client
for a driver name.
"""

from kivtest.drivers.base import BackendClient, ServerInfo, public_netloc
from kivtest.drivers.driver_factory import SUPPORTED_DRIVERS, create_client

__all__ = [
    "BackendClient",
    "ServerInfo",
    "SUPPORTED_DRIVERS",
    "create_client",
    "public_netloc",
]
