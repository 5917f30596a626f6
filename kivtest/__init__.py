"""
Kivik Conformance Test Orchestrator - Core Package.

This package contains the core logic for:
- Registry: Named test cases grouped by suite, split into read-only and read-write.
- Detection: Mapping a backend's self-reported identity to a suite.
- Clients: Privileged / unprivileged connection pairs for a target backend.
- Dispatcher: Resolving suites and running every registered case.
- Cleanup: Removing stray test databases left by earlier runs.
"""

__version__ = "0.1.0"
