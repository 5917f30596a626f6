"""
Suite identifiers and test database naming.

A suite groups the cases that apply to one backend family or version.
The pseudo-suite ``auto`` asks the dispatcher to detect the suite at runtime.
"""

from __future__ import annotations

import secrets
from typing import Dict, List

SUITE_AUTO = "auto"
SUITE_POUCH_LOCAL = "pouch"
SUITE_POUCH_REMOTE = "pouchRemote"
SUITE_COUCH16 = "couch16"
SUITE_COUCH20 = "couch20"
SUITE_CLOUDANT = "cloudant"
SUITE_KIVIK_SERVER = "kivikServer"
SUITE_KIVIK_MEMORY = "kivikMemory"
SUITE_KIVIK_FS = "kivikFilesystem"

ALL_SUITES: List[str] = [
    SUITE_POUCH_LOCAL,
    SUITE_POUCH_REMOTE,
    SUITE_COUCH16,
    SUITE_COUCH20,
    SUITE_KIVIK_MEMORY,
    SUITE_KIVIK_FS,
    SUITE_CLOUDANT,
    SUITE_KIVIK_SERVER,
]

# Mapping: suite -> driver that serves it
SUITE_DRIVERS: Dict[str, str] = {
    SUITE_POUCH_LOCAL: "pouch",
    SUITE_POUCH_REMOTE: "pouch",
    SUITE_COUCH16: "couch",
    SUITE_COUCH20: "couch",
    SUITE_CLOUDANT: "couch",
    SUITE_KIVIK_SERVER: "couch",
    SUITE_KIVIK_MEMORY: "memory",
    SUITE_KIVIK_FS: "fs",
}

# Prefix for every database created by a read-write case.
TEST_DB_PREFIX = "kivik$"


def test_db_name() -> str:
    """
    Generate a unique name for a temporary test database.

    Returns:
        TEST_DB_PREFIX followed by a random 64-bit value as 16 hex digits.
    """
    return f"{TEST_DB_PREFIX}{secrets.randbits(64):016x}"


def is_test_db(name: str) -> bool:
    """Check whether a database name carries the reserved test prefix."""
    return name.startswith(TEST_DB_PREFIX)


def is_known_suite(suite: str) -> bool:
    """Check whether a suite name is one of the defined suites (or auto)."""
    return suite == SUITE_AUTO or suite in SUITE_DRIVERS
