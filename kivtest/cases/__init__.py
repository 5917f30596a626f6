"""
Built-in conformance cases.

Registers a baseline set of cases for every suite:
- ServerInfo, AllDBs (read-only)
- CreateDB, DestroyDB (read-write)
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from kivtest.cases.databases import create_db, destroy_db
from kivtest.cases.server import all_dbs, server_info
from kivtest.registry import CaseFunc, SuiteRegistry
from kivtest.suites import ALL_SUITES

# (name, function, rw)
BUILTIN_CASES: List[Tuple[str, CaseFunc, bool]] = [
    ("ServerInfo", server_info, False),
    ("AllDBs", all_dbs, False),
    ("CreateDB", create_db, True),
    ("DestroyDB", destroy_db, True),
]


def register_builtin_cases(
    registry: SuiteRegistry, suites: Optional[Iterable[str]] = None
) -> SuiteRegistry:
    """
    Register the built-in cases.

    Args:
        registry: Registry to populate.
        suites: Suites to register for; defaults to ALL_SUITES.

    Returns:
        The same registry, for chaining.
    """
    suite_list = list(suites) if suites is not None else list(ALL_SUITES)
    for name, fn, rw in BUILTIN_CASES:
        registry.case(suite_list, name, rw=rw)(fn)
    return registry


__all__ = ["BUILTIN_CASES", "register_builtin_cases"]
