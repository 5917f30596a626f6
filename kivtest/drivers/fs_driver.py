"""
Filesystem Backend Client.

Stores each database as a directory under the path given in the DSN, e.g.
``fs://admin:secret@localhost/var/lib/kivik``.
"""

from __future__ import annotations

import shutil
import threading
from pathlib import Path
from typing import List
from urllib.parse import unquote, urlsplit

from loguru import logger

from kivtest.drivers.base import BackendClient, ServerInfo
from kivtest.errors import BackendError

FS_VENDOR = "Kivik Filesystem Adaptor"
FS_VERSION = "0.0.1"


class FilesystemClient(BackendClient):
    """Client for a directory-backed backend."""

    # Shared by every client so create/destroy on one root never interleave.
    _lock = threading.Lock()

    def __init__(self, dsn: str) -> None:
        super().__init__(dsn)
        self.root = Path(unquote(urlsplit(dsn).path) or ".")

    def _require_auth(self, action: str) -> None:
        if not self.authenticated:
            raise BackendError(f"{action}: authentication required", status=401)

    def connect(self) -> None:
        # An empty DSN path or "/" would put every top-level directory in scope.
        if self.root.parent == self.root:
            raise BackendError(f"refusing to use {self.root} as root directory", status=400)
        if not self.root.is_dir():
            raise BackendError(f"root directory not found: {self.root}", status=404)
        self._connected = True
        logger.info(f"FilesystemClient connected to {self.root}")

    def server_info(self) -> ServerInfo:
        return ServerInfo(vendor=FS_VENDOR, version=FS_VERSION)

    def all_dbs(self) -> List[str]:
        try:
            return sorted(p.name for p in self.root.iterdir() if p.is_dir())
        except OSError as e:
            raise BackendError(f"cannot list {self.root}: {e}") from e

    def create_db(self, name: str) -> None:
        self._require_auth("create_db")
        with self._lock:
            path = self.root / name
            if path.exists():
                raise BackendError(f"database {name} already exists", status=412)
            try:
                path.mkdir()
            except OSError as e:
                raise BackendError(f"cannot create {name}: {e}") from e

    def destroy_db(self, name: str) -> None:
        self._require_auth("destroy_db")
        with self._lock:
            path = self.root / name
            if not path.is_dir():
                raise BackendError(f"database {name} not found", status=404)
            try:
                shutil.rmtree(path)
            except OSError as e:
                raise BackendError(f"cannot delete {name}: {e}") from e
