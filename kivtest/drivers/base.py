"""
Abstract Base Class for Backend Clients.

Defines the unified interface that every database backend client (CouchDB
over HTTP, in-memory, filesystem) must implement. This abstraction lets the
orchestrator and the cases work with any backend transparently.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List
from urllib.parse import SplitResult, unquote, urlsplit

from loguru import logger


@dataclass(frozen=True)
class ServerInfo:
    """Self-reported identity of a backend."""
    vendor: str
    version: str


def public_netloc(parsed: SplitResult) -> str:
    """Host and port of a parsed DSN without userinfo, IPv6 hosts bracketed."""
    host = parsed.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    if parsed.port is not None:
        host = f"{host}:{parsed.port}"
    return host


class BackendClient(ABC):
    """
    Abstract base class for all backend client implementations.

    A client is bound to one DSN. Whether it is privileged depends solely
    on whether that DSN carries credentials.
    """

    def __init__(self, dsn: str) -> None:
        self.dsn = dsn
        parsed = urlsplit(dsn)
        self.username = unquote(parsed.username or "")
        self.password = unquote(parsed.password or "")
        self._connected = False
        logger.debug(
            f"{type(self).__name__} initialized — host={parsed.hostname}, "
            f"authenticated={self.authenticated}"
        )

    @property
    def authenticated(self) -> bool:
        return bool(self.username)

    @property
    def is_connected(self) -> bool:
        return self._connected

    @abstractmethod
    def connect(self) -> None:
        """Establish the connection. Raises BackendError on failure."""
        ...

    def close(self) -> None:
        """Release the connection."""
        self._connected = False

    @abstractmethod
    def server_info(self) -> ServerInfo:
        """Return the backend's vendor name and version."""
        ...

    @abstractmethod
    def all_dbs(self) -> List[str]:
        """List all database names visible to this client."""
        ...

    @abstractmethod
    def create_db(self, name: str) -> None:
        """Create a database."""
        ...

    @abstractmethod
    def destroy_db(self, name: str) -> None:
        """Delete a database."""
        ...

    def db_exists(self, name: str) -> bool:
        """Check whether a database exists."""
        return name in self.all_dbs()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
