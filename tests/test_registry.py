"""
Unit Tests for the Suite Registry.

Covers:
- register(): read-only / read-write partitioning, last-write-wins.
- case(): decorator registration for one or many suites.
- cases_for(): ordering, rw inclusion, unregistered suites.
"""

from __future__ import annotations

import pytest

from kivtest.registry import FunctionCase, SuiteRegistry
from kivtest.suites import SUITE_COUCH20, SUITE_KIVIK_MEMORY


# ---------------------------------------------------------------------------
# register() / cases_for()
# ---------------------------------------------------------------------------


class TestRegister:
    """Tests for SuiteRegistry.register and cases_for."""

    def test_unregistered_suite_is_empty(self, registry: SuiteRegistry) -> None:
        assert registry.cases_for("nope") == []
        assert registry.cases_for("nope", include_rw=True) == []

    def test_read_only_case_returned(self, registry, make_recorder) -> None:
        case = make_recorder()
        registry.register(SUITE_KIVIK_MEMORY, "AllDBs", case)
        assert registry.cases_for(SUITE_KIVIK_MEMORY) == [("AllDBs", case)]

    def test_rw_case_hidden_unless_requested(self, registry, make_recorder) -> None:
        ro, rw = make_recorder(), make_recorder()
        registry.register(SUITE_KIVIK_MEMORY, "AllDBs", ro)
        registry.register(SUITE_KIVIK_MEMORY, "CreateDB", rw, rw=True)

        assert registry.cases_for(SUITE_KIVIK_MEMORY) == [("AllDBs", ro)]
        assert registry.cases_for(SUITE_KIVIK_MEMORY, include_rw=True) == [
            ("AllDBs", ro),
            ("CreateDB", rw),
        ]

    def test_last_registration_wins(self, registry, make_recorder) -> None:
        first, second = make_recorder(), make_recorder()
        registry.register(SUITE_COUCH20, "AllDBs", first)
        registry.register(SUITE_COUCH20, "AllDBs", second)

        cases = registry.cases_for(SUITE_COUCH20)
        assert cases == [("AllDBs", second)]
        assert len(registry) == 1

    def test_same_name_in_both_partitions(self, registry, make_recorder) -> None:
        ro, rw = make_recorder(), make_recorder()
        registry.register(SUITE_COUCH20, "Thing", ro)
        registry.register(SUITE_COUCH20, "Thing", rw, rw=True)

        assert registry.cases_for(SUITE_COUCH20, include_rw=True) == [
            ("Thing", ro),
            ("Thing", rw),
        ]
        assert len(registry) == 2

    def test_read_only_sorted_before_rw(self, registry, make_recorder) -> None:
        registry.register(SUITE_COUCH20, "Zeta", make_recorder())
        registry.register(SUITE_COUCH20, "Alpha", make_recorder())
        registry.register(SUITE_COUCH20, "Beta", make_recorder(), rw=True)
        registry.register(SUITE_COUCH20, "Aardvark", make_recorder(), rw=True)

        assert registry.names(SUITE_COUCH20) == ["Alpha", "Zeta", "Aardvark", "Beta"]

    def test_suites_are_isolated(self, registry, make_recorder) -> None:
        registry.register(SUITE_COUCH20, "AllDBs", make_recorder())
        assert registry.cases_for(SUITE_KIVIK_MEMORY) == []
        assert registry.suites() == [SUITE_COUCH20]


# ---------------------------------------------------------------------------
# case() decorator
# ---------------------------------------------------------------------------


class TestCaseDecorator:
    """Tests for SuiteRegistry.case."""

    def test_decorator_returns_function_unchanged(self, registry) -> None:
        def my_case(clients, suite, ctx):
            pass

        decorated = registry.case(SUITE_COUCH20, "Mine")(my_case)
        assert decorated is my_case

    def test_decorator_wraps_in_function_case(self, registry) -> None:
        calls = []

        @registry.case(SUITE_COUCH20, "Mine")
        def my_case(clients, suite, ctx):
            calls.append((clients, suite, ctx))

        (name, case), = registry.cases_for(SUITE_COUCH20)
        assert name == "Mine"
        assert isinstance(case, FunctionCase)
        case.execute("clients", SUITE_COUCH20, "ctx")
        assert calls == [("clients", SUITE_COUCH20, "ctx")]

    def test_decorator_multiple_suites(self, registry) -> None:
        @registry.case([SUITE_COUCH20, SUITE_KIVIK_MEMORY], "Shared", rw=True)
        def shared(clients, suite, ctx):
            pass

        assert registry.cases_for(SUITE_COUCH20) == []
        assert registry.names(SUITE_COUCH20) == ["Shared"]
        assert registry.names(SUITE_KIVIK_MEMORY) == ["Shared"]
        assert registry.suites() == sorted([SUITE_COUCH20, SUITE_KIVIK_MEMORY])

    @pytest.mark.parametrize("rw", [False, True])
    def test_decorator_overwrites(self, registry, rw) -> None:
        @registry.case(SUITE_COUCH20, "Dup", rw=rw)
        def first(clients, suite, ctx):
            pass

        @registry.case(SUITE_COUCH20, "Dup", rw=rw)
        def second(clients, suite, ctx):
            pass

        (_, case), = registry.cases_for(SUITE_COUCH20, include_rw=True)
        assert case.fn is second
