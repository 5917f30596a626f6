"""
Case Reporting Context.

Every case reports through a CaseContext rather than a return value. The
context collects log lines and errors, lets a case stop early (fatal/skip),
and runs nested sub-units whose failure marks the parent as failed. Results
are packaged as CaseResult objects and aggregated into a RunReport.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from kivtest.errors import BackendError


class CaseStatus(Enum):
    """Outcome of a case execution."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class CaseAborted(Exception):
    """Raised by CaseContext.fatal() to stop the running case."""

    pass


class CaseSkipped(Exception):
    """Raised by CaseContext.skip() to stop the running case as skipped."""

    pass


@dataclass
class CaseResult:
    """
    Result of a single case (or nested sub-unit) execution.

    Attributes:
        name: Case name; nested sub-units use "parent/child".
        suite: Suite the case ran under.
        status: Passed, failed or skipped.
        duration_ms: Execution time in milliseconds.
        messages: Log lines recorded by the case.
        error: Error summary if the case failed, or skip reason.
        subresults: Results of nested sub-units, in execution order.
    """

    name: str
    suite: str
    status: CaseStatus = CaseStatus.PASSED
    duration_ms: float = 0.0
    messages: List[str] = field(default_factory=list)
    error: Optional[str] = None
    subresults: List["CaseResult"] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status == CaseStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status == CaseStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the result to a dictionary for reporting."""
        return {
            "name": self.name,
            "suite": self.suite,
            "status": self.status.value,
            "duration_ms": round(self.duration_ms, 3),
            "messages": list(self.messages),
            "error": self.error,
            "subresults": [r.to_dict() for r in self.subresults],
        }


class CaseContext:
    """
    Reporting handle passed to every case.

    Usage::

        def create_db(clients, suite, ctx):
            try:
                clients.admin.create_db(name)
            except BackendError as e:
                ctx.fatal(f"create failed: {e}")
            ctx.run("NoAuth", lambda sub: ...)
    """

    def __init__(self, name: str, suite: str, verbose: bool = False) -> None:
        self.name = name
        self.suite = suite
        self.verbose = verbose
        self._failed = False
        self._errors: List[str] = []
        self._messages: List[str] = []
        self._subresults: List[CaseResult] = []

    @property
    def failed(self) -> bool:
        return self._failed

    def log(self, message: str) -> None:
        """Record an informational line for this case."""
        self._messages.append(message)
        if self.verbose:
            logger.info(f"    {self.name}: {message}")
        else:
            logger.debug(f"    {self.name}: {message}")

    def error(self, message: str) -> None:
        """Mark the case failed and keep running."""
        self._failed = True
        self._errors.append(message)
        self._messages.append(message)
        logger.error(f"    {self.name}: {message}")

    def fatal(self, message: str) -> None:
        """Mark the case failed and stop it."""
        self.error(message)
        raise CaseAborted(message)

    def skip(self, reason: str = "") -> None:
        """Stop the case and report it as skipped."""
        raise CaseSkipped(reason)

    def run(self, name: str, fn: Callable[["CaseContext"], None]) -> bool:
        """
        Run a nested sub-unit.

        Args:
            name: Sub-unit name, appended to this case's name.
            fn: Callable receiving the sub-unit's own context.

        Returns:
            True unless the sub-unit failed. A failed sub-unit also marks
            this context as failed.
        """
        child = CaseContext(f"{self.name}/{name}", self.suite, verbose=self.verbose)
        result = execute_in_context(child, fn)
        self._subresults.append(result)
        if result.failed:
            self._failed = True
        return not result.failed


def _describe(exc: BaseException) -> str:
    if isinstance(exc, AssertionError):
        return str(exc) or "Assertion failed"
    if isinstance(exc, BackendError) and exc.status is not None:
        return f"BackendError({exc.status}): {exc}"
    return f"{type(exc).__name__}: {exc}"


def execute_in_context(
    ctx: CaseContext, fn: Callable[[CaseContext], None]
) -> CaseResult:
    """
    Execute ``fn(ctx)`` and package the outcome.

    Uncaught exceptions (assertions included) fail the case; they never
    propagate to the caller.
    """
    start = time.monotonic()
    status = CaseStatus.PASSED
    error: Optional[str] = None

    try:
        fn(ctx)
    except CaseAborted:
        pass
    except CaseSkipped as e:
        if not ctx.failed:
            status = CaseStatus.SKIPPED
            error = str(e) or None
    except Exception as e:
        ctx.error(_describe(e))
        logger.opt(exception=e).debug(f"{ctx.name} raised")

    if ctx.failed:
        status = CaseStatus.FAILED
        error = "; ".join(ctx._errors) or "failed in sub-unit"

    elapsed_ms = (time.monotonic() - start) * 1000
    return CaseResult(
        name=ctx.name,
        suite=ctx.suite,
        status=status,
        duration_ms=elapsed_ms,
        messages=list(ctx._messages),
        error=error,
        subresults=list(ctx._subresults),
    )


@dataclass
class RunReport:
    """
    Aggregate outcome of a dispatcher run.

    Attributes:
        suites: Effective suites that were run.
        results: One result per top-level case, in execution order.
        cleaned: Number of databases removed, for cleanup-only runs.
        duration_ms: Total run time in milliseconds.
    """

    suites: List[str] = field(default_factory=list)
    results: List[CaseResult] = field(default_factory=list)
    cleaned: Optional[int] = None
    duration_ms: float = 0.0

    def add_result(self, result: CaseResult) -> None:
        self.results.append(result)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.status == CaseStatus.PASSED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == CaseStatus.FAILED)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.status == CaseStatus.SKIPPED)

    @property
    def success(self) -> bool:
        """Whether no case failed."""
        return self.failed == 0

    def result_for(self, suite: str, name: str) -> Optional[CaseResult]:
        """Find the top-level result for a case, if it was dispatched."""
        for result in self.results:
            if result.suite == suite and result.name == name:
                return result
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the report to a dictionary."""
        return {
            "suites": list(self.suites),
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "cleaned": self.cleaned,
            "duration_ms": round(self.duration_ms, 3),
            "results": [r.to_dict() for r in self.results],
        }
