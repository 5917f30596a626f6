"""
In-Memory Backend Client — simulation layer for running without a server.

Databases live in process memory, so the whole orchestrator can be exercised
in CI without external services. All clients whose DSN names the same host
share one MemoryServer, which lets an admin client and a no-auth client
observe the same target.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Set
from urllib.parse import urlsplit

from loguru import logger

from kivtest.drivers.base import BackendClient, ServerInfo
from kivtest.errors import BackendError

MEMORY_VENDOR = "Kivik Memory Adaptor"
MEMORY_VERSION = "0.0.1"


class MemoryServer:
    """A set of named databases guarded by a lock."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.Lock()
        self._dbs: Set[str] = set()

    def all_dbs(self) -> List[str]:
        with self._lock:
            return sorted(self._dbs)

    def create_db(self, name: str) -> None:
        with self._lock:
            if name in self._dbs:
                raise BackendError(f"database {name} already exists", status=412)
            self._dbs.add(name)

    def destroy_db(self, name: str) -> None:
        with self._lock:
            if name not in self._dbs:
                raise BackendError(f"database {name} not found", status=404)
            self._dbs.discard(name)


_servers: Dict[str, MemoryServer] = {}
_servers_lock = threading.Lock()


def get_memory_server(name: str) -> MemoryServer:
    """Return the server registered under ``name``, creating it on first use."""
    with _servers_lock:
        if name not in _servers:
            _servers[name] = MemoryServer(name)
            logger.debug(f"MemoryServer '{name}' created")
        return _servers[name]


def reset_memory_servers() -> None:
    """Forget every in-memory server."""
    with _servers_lock:
        _servers.clear()


class MemoryClient(BackendClient):
    """
    Client for an in-memory backend.

    Reads are open to everyone; creating or deleting a database requires
    credentials, mirroring an admin-party-free CouchDB.
    """

    def __init__(self, dsn: str) -> None:
        super().__init__(dsn)
        self.server_name = urlsplit(dsn).hostname or "localhost"
        self._server = get_memory_server(self.server_name)

    @property
    def server(self) -> MemoryServer:
        return self._server

    def _require_auth(self, action: str) -> None:
        if not self.authenticated:
            raise BackendError(f"{action}: authentication required", status=401)

    def connect(self) -> None:
        self._connected = True
        logger.info(f"MemoryClient connected to '{self.server_name}'")

    def server_info(self) -> ServerInfo:
        return ServerInfo(vendor=MEMORY_VENDOR, version=MEMORY_VERSION)

    def all_dbs(self) -> List[str]:
        return self._server.all_dbs()

    def create_db(self, name: str) -> None:
        self._require_auth("create_db")
        self._server.create_db(name)

    def destroy_db(self, name: str) -> None:
        self._require_auth("destroy_db")
        self._server.destroy_db(name)
