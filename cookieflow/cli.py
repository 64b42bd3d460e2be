"""Typer based command line entry point for cookieflow."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from cookieflow.core.logger import get_logger
from cookieflow_persist.stores.base_store import StoreError
from cookieflow_persist.stores.cookie_store import CookieStore

USAGE_EXIT_CODE = 2

app = typer.Typer(help="Inspect cookies persisted for remote browser sessions.")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    get_logger().setLevel(level_value)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_usage())
        typer.echo("Usage: cookieflow list")
        raise typer.Exit(code=USAGE_EXIT_CODE)


@app.command("list")
def list_command(
    cookie_dir: Optional[Path] = typer.Option(
        None,
        "--cookie-dir",
        help="Cookie directory (defaults to COOKIE_DIR).",
    ),
) -> None:
    """List domains that have saved cookies."""

    try:
        domains = CookieStore(cookie_dir).list_domains()
    except StoreError as exc:
        get_logger().error("list failed: %s", exc)
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Saved cookie domains: {', '.join(domains) or 'none'}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
