"""Read-only cases covering the server itself."""

from __future__ import annotations

from kivtest.cases.expectations import expected
from kivtest.cases.helpers import call_status, check_status
from kivtest.clients import ClientPair
from kivtest.context import CaseContext
from kivtest.drivers import BackendClient


def _check_server_info(ctx: CaseContext, client: BackendClient, suite: str, label: str) -> None:
    want_status = expected(suite, f"ServerInfo/{label}.status", 0)
    if want_status:
        check_status(ctx, "server_info", want_status, call_status(client.server_info))
        return

    info = client.server_info()
    ctx.log(f"vendor={info.vendor!r} version={info.version!r}")
    if not info.vendor:
        ctx.error("server reported an empty vendor name")
    if not info.version:
        ctx.error("server reported an empty version")
    want_vendor = expected(suite, "ServerInfo.vendor")
    if want_vendor and info.vendor != want_vendor:
        ctx.error(f"expected vendor {want_vendor!r}, got {info.vendor!r}")


def server_info(clients: ClientPair, suite: str, ctx: CaseContext) -> None:
    ctx.run("Admin", lambda sub: _check_server_info(sub, clients.admin, suite, "Admin"))
    ctx.run("NoAuth", lambda sub: _check_server_info(sub, clients.no_auth, suite, "NoAuth"))


def _check_all_dbs(ctx: CaseContext, client: BackendClient, suite: str, label: str) -> None:
    want_status = expected(suite, f"AllDBs/{label}.status", 0)
    if want_status:
        check_status(ctx, "all_dbs", want_status, call_status(client.all_dbs))
        return

    dbs = client.all_dbs()
    if not isinstance(dbs, list) or not all(isinstance(d, str) for d in dbs):
        ctx.fatal(f"all_dbs returned {dbs!r}, expected a list of names")
    missing = [d for d in expected(suite, "AllDBs.expected", []) if d not in dbs]
    if missing:
        ctx.error(f"missing expected databases: {missing}")
    ctx.log(f"{len(dbs)} database(s) visible")


def all_dbs(clients: ClientPair, suite: str, ctx: CaseContext) -> None:
    ctx.run("Admin", lambda sub: _check_all_dbs(sub, clients.admin, suite, "Admin"))
    ctx.run("NoAuth", lambda sub: _check_all_dbs(sub, clients.no_auth, suite, "NoAuth"))
