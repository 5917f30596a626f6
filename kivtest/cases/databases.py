"""
Read-write cases that create and delete databases.

Every database is named with test_db_name(), so concurrent runs never touch
each other's databases, and is removed before the case returns.
"""

from __future__ import annotations

from kivtest.cases.expectations import expected
from kivtest.cases.helpers import call_status, check_status
from kivtest.clients import ClientPair
from kivtest.context import CaseContext
from kivtest.suites import test_db_name


def _drop(clients: ClientPair, ctx: CaseContext, name: str) -> None:
    if clients.admin.db_exists(name):
        clients.admin.destroy_db(name)
        ctx.log(f"removed {name}")


def _create_admin(clients: ClientPair, ctx: CaseContext) -> None:
    name = test_db_name()
    clients.admin.create_db(name)
    try:
        if not clients.admin.db_exists(name):
            ctx.error(f"{name} does not exist after create_db")
        check_status(ctx, "duplicate create_db", 412, call_status(clients.admin.create_db, name))
    finally:
        _drop(clients, ctx, name)


def _create_no_auth(clients: ClientPair, suite: str, ctx: CaseContext) -> None:
    name = test_db_name()
    try:
        got = call_status(clients.no_auth.create_db, name)
        check_status(ctx, "create_db", expected(suite, "CreateDB/NoAuth.status", 0), got)
    finally:
        _drop(clients, ctx, name)


def create_db(clients: ClientPair, suite: str, ctx: CaseContext) -> None:
    ctx.run("Admin", lambda sub: _create_admin(clients, sub))
    ctx.run("NoAuth", lambda sub: _create_no_auth(clients, suite, sub))


def _destroy_admin(clients: ClientPair, ctx: CaseContext) -> None:
    name = test_db_name()
    clients.admin.create_db(name)
    try:
        clients.admin.destroy_db(name)
        if clients.admin.db_exists(name):
            ctx.error(f"{name} still exists after destroy_db")
    finally:
        _drop(clients, ctx, name)
    check_status(ctx, "destroy missing db", 404, call_status(clients.admin.destroy_db, test_db_name()))


def _destroy_no_auth(clients: ClientPair, suite: str, ctx: CaseContext) -> None:
    name = test_db_name()
    clients.admin.create_db(name)
    try:
        got = call_status(clients.no_auth.destroy_db, name)
        check_status(ctx, "destroy_db", expected(suite, "DestroyDB/NoAuth.status", 0), got)
    finally:
        _drop(clients, ctx, name)


def destroy_db(clients: ClientPair, suite: str, ctx: CaseContext) -> None:
    ctx.run("Admin", lambda sub: _destroy_admin(clients, sub))
    ctx.run("NoAuth", lambda sub: _destroy_no_auth(clients, suite, sub))
