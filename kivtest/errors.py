"""
Error taxonomy for the conformance orchestrator.

Fatal errors abort a whole run (or a cleanup) before or instead of any case
execution. Per-case failures never surface here; they are recorded on the
case's CaseContext.
"""

from __future__ import annotations

from typing import Optional


class ConformanceError(Exception):
    """Base class for all fatal orchestrator errors."""

    pass


class InvalidDSN(ConformanceError):
    """Raised when a connection string cannot be parsed."""

    pass


class MissingCredentials(InvalidDSN):
    """Raised when a connection string carries no userinfo."""

    pass


class ConnectionFailed(ConformanceError):
    """Raised when the privileged or unprivileged client cannot connect."""

    pass


class UnsupportedBackend(ConformanceError):
    """Raised when auto-detection finds no suite for the target backend."""

    pass


class ListFailed(ConformanceError):
    """Raised when cleanup cannot list the backend's databases."""

    pass


class DeleteFailed(ConformanceError):
    """Raised when cleanup fails to delete one of the matched databases."""

    def __init__(self, message: str, db_name: str = "") -> None:
        super().__init__(message)
        self.db_name = db_name


class BackendError(Exception):
    """
    Raised by backend clients when an operation fails.

    Attributes:
        status: HTTP-style status code (401, 404, 412, ...), or None when
                the failure happened below the protocol (e.g. network).
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
