"""Small helpers shared by the built-in cases."""

from __future__ import annotations

from typing import Any, Callable

from kivtest.context import CaseContext
from kivtest.errors import BackendError


def call_status(fn: Callable[..., Any], *args: Any) -> int:
    """
    Call ``fn`` and return 0 on success or the BackendError status.

    A BackendError without a status (network failure) propagates, since it
    says nothing about the permission being tested.
    """
    try:
        fn(*args)
    except BackendError as e:
        if e.status is None:
            raise
        return e.status
    return 0


def check_status(ctx: CaseContext, what: str, want: int, got: int) -> bool:
    """Report an error on ``ctx`` when ``got`` differs from ``want``."""
    if want == got:
        ctx.log(f"{what}: status {got} as expected")
        return True
    ctx.error(f"{what}: expected status {want}, got {got}")
    return False
