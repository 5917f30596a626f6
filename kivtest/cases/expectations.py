"""
Per-suite expectations for the built-in cases.

Keys are "<Case>.<item>" or "<Case>/<SubUnit>.<item>". A status of 0 means
the operation is expected to succeed; any other value is the HTTP-style
status the backend should reject it with.
"""

from __future__ import annotations

from typing import Any, Dict

from kivtest.drivers.fs_driver import FS_VENDOR
from kivtest.drivers.memory_driver import MEMORY_VENDOR
from kivtest.suites import (
    SUITE_CLOUDANT,
    SUITE_COUCH16,
    SUITE_COUCH20,
    SUITE_KIVIK_FS,
    SUITE_KIVIK_MEMORY,
    SUITE_KIVIK_SERVER,
    SUITE_POUCH_LOCAL,
    SUITE_POUCH_REMOTE,
)

EXPECTATIONS: Dict[str, Dict[str, Any]] = {
    SUITE_POUCH_LOCAL: {
        "ServerInfo.vendor": "PouchDB",
        "AllDBs.expected": [],
        "CreateDB/NoAuth.status": 0,
        "DestroyDB/NoAuth.status": 0,
    },
    SUITE_POUCH_REMOTE: {
        "AllDBs.expected": [],
        "CreateDB/NoAuth.status": 401,
        "DestroyDB/NoAuth.status": 401,
    },
    SUITE_COUCH16: {
        "ServerInfo.vendor": "The Apache Software Foundation",
        "AllDBs.expected": ["_replicator", "_users"],
        "CreateDB/NoAuth.status": 401,
        "DestroyDB/NoAuth.status": 401,
    },
    SUITE_COUCH20: {
        "ServerInfo.vendor": "The Apache Software Foundation",
        "AllDBs.expected": ["_global_changes", "_replicator", "_users"],
        "CreateDB/NoAuth.status": 401,
        "DestroyDB/NoAuth.status": 401,
    },
    SUITE_CLOUDANT: {
        "ServerInfo.vendor": "IBM Cloudant",
        "AllDBs.expected": ["_replicator", "_users"],
        "AllDBs/NoAuth.status": 401,
        "CreateDB/NoAuth.status": 401,
        "DestroyDB/NoAuth.status": 401,
    },
    SUITE_KIVIK_SERVER: {
        "AllDBs.expected": [],
        "CreateDB/NoAuth.status": 401,
        "DestroyDB/NoAuth.status": 401,
    },
    SUITE_KIVIK_MEMORY: {
        "ServerInfo.vendor": MEMORY_VENDOR,
        "AllDBs.expected": [],
        "CreateDB/NoAuth.status": 401,
        "DestroyDB/NoAuth.status": 401,
    },
    SUITE_KIVIK_FS: {
        "ServerInfo.vendor": FS_VENDOR,
        "AllDBs.expected": [],
        "CreateDB/NoAuth.status": 401,
        "DestroyDB/NoAuth.status": 401,
    },
}


def expected(suite: str, key: str, default: Any = None) -> Any:
    """Look up an expectation for a suite, falling back to ``default``."""
    return EXPECTATIONS.get(suite, {}).get(key, default)
