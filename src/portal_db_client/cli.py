"""Read-only command-line interface over the Portal DB client."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from requests.exceptions import RequestException

from portal_db_client.client import new_read_only_db_client
from portal_db_client.config import load_config
from portal_db_client.errors import PortalDBError
from portal_db_client.interfaces import DBReader
from portal_db_client.log_events import LogEvents
from portal_db_client.logger import LogConfig, LogFormat, UnifiedLogger
from portal_db_client.options import AccountOptions, ChainOptions, PortalAppOptions
from portal_db_client.pipeline import type_adapter

__all__ = ["app", "run"]

app = typer.Typer(
    name="portal-db",
    help="Query the Portal HTTP DB. Connection settings come from --config and PORTAL_DB_* variables.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass(frozen=True)
class _State:
    config_path: Path | None


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        readable=True,
        help="YAML file with base_url, api_key, version, retries and timeout.",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level name."),
    log_format: LogFormat = typer.Option(
        LogFormat.JSON,
        "--log-format",
        case_sensitive=False,
        help="Log renderer.",
    ),
) -> None:
    try:
        UnifiedLogger.configure(LogConfig(level=log_level, format=log_format))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc
    ctx.obj = _State(config_path=config)


def _render(value: Any) -> str:
    return type_adapter(Any).dump_json(value, indent=2, by_alias=True).decode("utf-8")


def _run(ctx: typer.Context, call: Callable[[DBReader], Any]) -> None:
    state: _State = ctx.obj
    log = UnifiedLogger.get(__name__).bind(component="cli")
    with UnifiedLogger.scoped(command=ctx.info_name):
        try:
            reader = new_read_only_db_client(load_config(state.config_path))
            try:
                result = call(reader)
            finally:
                reader.close()
        except (PortalDBError, RequestException) as exc:
            log.error(
                LogEvents.CLI_COMMAND_FAILED.value, error=str(exc), error_type=type(exc).__name__
            )
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from exc
    typer.echo(_render(result))


# -- chains -----------------------------------------------------------------


@app.command("chains")
def chains(
    ctx: typer.Context,
    include_inactive: bool = typer.Option(False, "--include-inactive"),
    exclude_gigastake_apps: bool = typer.Option(False, "--exclude-gigastake-apps"),
    include_deleted: bool = typer.Option(False, "--include-deleted"),
) -> None:
    """List chains."""

    options = ChainOptions(
        exclude_gigastake_apps=exclude_gigastake_apps,
        include_inactive=include_inactive,
        include_deleted=include_deleted,
    )
    _run(ctx, lambda reader: reader.get_all_chains(options))


@app.command("chain")
def chain(ctx: typer.Context, chain_id: str = typer.Argument(..., help="Relay chain ID.")) -> None:
    """Show one chain."""

    _run(ctx, lambda reader: reader.get_chain_by_id(chain_id))


# -- portal apps ------------------------------------------------------------


@app.command("apps")
def portal_apps(
    ctx: typer.Context,
    include_deleted: bool = typer.Option(False, "--include-deleted"),
) -> None:
    """List portal apps."""

    options = PortalAppOptions(include_deleted=include_deleted)
    _run(ctx, lambda reader: reader.get_all_portal_apps(options))


@app.command("app")
def portal_app(ctx: typer.Context, app_id: str = typer.Argument(..., help="Portal app ID.")) -> None:
    """Show one portal app."""

    _run(ctx, lambda reader: reader.get_portal_app_by_id(app_id))


@app.command("user-apps")
def user_apps(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="Portal user ID."),
    role: list[str] | None = typer.Option(
        None, "--role", help="Only apps where the user holds this role (repeatable)."
    ),
    include_deleted: bool = typer.Option(False, "--include-deleted"),
) -> None:
    """List the portal apps a user has access to."""

    options = PortalAppOptions(role_name_filters=tuple(role or ()), include_deleted=include_deleted)
    _run(ctx, lambda reader: reader.get_portal_apps_by_user(user_id, options))


@app.command("middleware-apps")
def middleware_apps(ctx: typer.Context) -> None:
    """List the reduced portal app view served to the relay middleware."""

    _run(ctx, lambda reader: reader.get_portal_apps_for_middleware())


# -- accounts ---------------------------------------------------------------


@app.command("accounts")
def accounts(
    ctx: typer.Context,
    include_deleted: bool = typer.Option(False, "--include-deleted"),
) -> None:
    """List accounts."""

    options = AccountOptions(include_deleted=include_deleted)
    _run(ctx, lambda reader: reader.get_all_accounts(options))


@app.command("account")
def account(ctx: typer.Context, account_id: str = typer.Argument(..., help="Account ID.")) -> None:
    """Show one account."""

    _run(ctx, lambda reader: reader.get_account_by_id(account_id))


@app.command("user-accounts")
def user_accounts(ctx: typer.Context, user_id: str = typer.Argument(..., help="Portal user ID.")) -> None:
    """List the accounts a user belongs to."""

    _run(ctx, lambda reader: reader.get_accounts_by_user(user_id))


# -- users ------------------------------------------------------------------


@app.command("permissions")
def permissions(
    ctx: typer.Context,
    provider_user_id: str = typer.Argument(..., help="Auth provider user ID."),
) -> None:
    """Show the portal app permissions of a user."""

    _run(ctx, lambda reader: reader.get_user_permission_by_user_id(provider_user_id))


@app.command("user-id")
def user_id(
    ctx: typer.Context,
    provider_user_id: str = typer.Argument(..., help="Auth provider user ID."),
) -> None:
    """Resolve an auth provider user ID to the portal user ID."""

    _run(ctx, lambda reader: reader.get_portal_user_id_from_provider_user_id(provider_user_id))


# -- plans and blocked contracts ---------------------------------------------


@app.command("plans")
def plans(ctx: typer.Context) -> None:
    """List pay plans."""

    _run(ctx, lambda reader: reader.get_all_plans())


@app.command("blocked-contracts")
def blocked_contracts(ctx: typer.Context) -> None:
    """Show the global blocked contract list."""

    _run(ctx, lambda reader: reader.get_blocked_contracts())


def run() -> None:
    """Entry point used by the ``portal-db`` console script."""

    app(prog_name="portal-db")
