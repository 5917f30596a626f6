"""
Suite Registry.

Holds the mapping suite -> case name -> case, split into read-only cases
and read-write (state-mutating) cases. Registration happens once at
start-up; the registry is only read while cases are dispatched, so it does
no locking.

Example:
    registry = SuiteRegistry()

    @registry.case([SUITE_COUCH20, SUITE_KIVIK_MEMORY], "AllDBs")
    def all_dbs(clients, suite, ctx):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Protocol, Tuple, Union

from loguru import logger

from kivtest.clients import ClientPair
from kivtest.context import CaseContext

CaseFunc = Callable[[ClientPair, str, CaseContext], None]


class ConformanceCase(Protocol):
    """Anything that can be executed as a case."""

    def execute(self, clients: ClientPair, suite: str, ctx: CaseContext) -> None:
        ...


@dataclass(frozen=True)
class FunctionCase:
    """Adapts a plain function to the case interface."""

    fn: CaseFunc

    def execute(self, clients: ClientPair, suite: str, ctx: CaseContext) -> None:
        self.fn(clients, suite, ctx)


class SuiteRegistry:
    """Registry of conformance cases keyed by suite, then name."""

    def __init__(self) -> None:
        self._ro: Dict[str, Dict[str, ConformanceCase]] = {}
        self._rw: Dict[str, Dict[str, ConformanceCase]] = {}

    def register(
        self,
        suite: str,
        name: str,
        case: ConformanceCase,
        rw: bool = False,
    ) -> None:
        """
        Register a case for a suite.

        A later registration under the same (suite, name, rw) replaces the
        earlier one.

        Args:
            suite: Suite the case belongs to.
            name: Case name, unique within the suite.
            case: Object exposing ``execute(clients, suite, ctx)``.
            rw: True if the case writes to the backend.
        """
        table = self._rw if rw else self._ro
        cases = table.setdefault(suite, {})
        if name in cases:
            logger.debug(f"Replacing case {suite}/{name} (rw={rw})")
        cases[name] = case

    def case(
        self,
        suites: Union[str, Iterable[str]],
        name: str,
        rw: bool = False,
    ) -> Callable[[CaseFunc], CaseFunc]:
        """
        Decorator to register a function as a case for one or more suites.

        Returns:
            Decorator function; the decorated function is returned unchanged.
        """
        suite_list = [suites] if isinstance(suites, str) else list(suites)

        def decorator(fn: CaseFunc) -> CaseFunc:
            wrapped = FunctionCase(fn)
            for suite in suite_list:
                self.register(suite, name, wrapped, rw=rw)
            return fn

        return decorator

    def cases_for(
        self, suite: str, include_rw: bool = False
    ) -> List[Tuple[str, ConformanceCase]]:
        """
        Get the cases registered for a suite.

        Args:
            suite: Suite identifier.
            include_rw: Whether to include read-write cases.

        Returns:
            (name, case) pairs: read-only cases sorted by name, followed by
            read-write cases sorted by name when requested. Empty for an
            unregistered suite.
        """
        selected = sorted(self._ro.get(suite, {}).items())
        if include_rw:
            selected.extend(sorted(self._rw.get(suite, {}).items()))
        return selected

    def names(self, suite: str, include_rw: bool = True) -> List[str]:
        """List the case names registered for a suite."""
        return [name for name, _ in self.cases_for(suite, include_rw)]

    def suites(self) -> List[str]:
        """List every suite with at least one registered case."""
        return sorted(set(self._ro) | set(self._rw))

    def __len__(self) -> int:
        return sum(len(c) for c in self._ro.values()) + sum(
            len(c) for c in self._rw.values()
        )
