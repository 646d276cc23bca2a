"""Typer application and CLI entry point for paramauth.

The CLI is operator tooling for checking a deployment's Parameter Store
configuration from a shell:

* ``paramauth token KEY`` prints a valid token, refreshing the cached
  client-credentials token if needed (or minting a JWT with
  ``--strategy jwt``).
* ``paramauth status KEY`` reports the cached client-credentials token's
  expiry without refreshing it.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from datetime import datetime, timezone
from typing import Any, Awaitable, Optional, TypeVar

import typer
from rich.logging import RichHandler

from paramauth import __version__
from paramauth.auth.base import epoch_millis
from paramauth.auth.manager import create_default_manager
from paramauth.config import load_settings
from paramauth.exceptions import ParamAuthError
from paramauth.exit_codes import EXIT_GENERIC_FAILURE
from paramauth.models import Settings, Strategy
from paramauth.output import (
    OutputFormat,
    OutputManager,
    error,
    get_output,
    print_data,
    print_document,
    set_output,
)
from paramauth.strategies.client_credentials import ClientCredentialsSupplier

T = TypeVar("T")

app = typer.Typer(
    name="paramauth",
    help="Fetch and inspect bearer credentials configured in AWS Parameter Store.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"paramauth {__version__}")
        raise typer.Exit()


def _configure_logging(output: OutputManager, verbose: bool) -> None:
    """Send library log records to stderr through Rich."""
    root = logging.getLogger("paramauth")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = RichHandler(console=output.stderr_console, show_path=False, show_time=False)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    region: Optional[str] = typer.Option(
        None, "--region", help="Parameter Store region (default: $PARAM_STORE_REGION or us-east-1)."
    ),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", help="Parameter path prefix (default: $PARAMAUTH_PARAM_PREFIX or /oauth)."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback: installs output and logging, resolves settings into ``ctx.obj``."""
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    _configure_logging(output, verbose)

    try:
        settings = load_settings(region=region, prefix=prefix)
    except ParamAuthError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


def _run(awaitable: Awaitable[T]) -> T:
    """Run *awaitable* to completion, mapping library errors to exit codes."""

    async def _wrapped() -> T:
        return await awaitable

    try:
        return asyncio.run(_wrapped())
    except ParamAuthError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


@app.command("token")
def token_command(
    ctx: typer.Context,
    key: str = typer.Argument(help="Credential key configured under <prefix>/<key>/."),
    strategy: Strategy = typer.Option(
        Strategy.CLIENT_CREDENTIALS,
        "--strategy",
        "-s",
        help="Token strategy.",
        case_sensitive=False,
    ),
) -> None:
    """Print a valid token for KEY.

    Example::

        paramauth token blackboard
        paramauth token blackboard --strategy jwt
    """
    manager = create_default_manager(_settings(ctx))
    try:
        supplier = manager.create_supplier(key, strategy)
    except ParamAuthError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    get_output().debug(f"fetching {strategy.value} token for {key}")
    print_data(_run(supplier.get_token()))


@app.command("status")
def status_command(
    ctx: typer.Context,
    key: str = typer.Argument(help="Credential key configured under <prefix>/<key>/."),
) -> None:
    """Show the cached client-credentials token's expiry for KEY without refreshing it."""
    manager = create_default_manager(_settings(ctx))
    try:
        supplier = manager.client_credentials(key)
    except ParamAuthError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    assert isinstance(supplier, ClientCredentialsSupplier)

    cached = _run(supplier.read_cached())
    now = epoch_millis()
    document: dict[str, Any] = {
        "key": key,
        "path": supplier.token_path,
        "cached": cached is not None,
    }
    if cached is not None:
        expires = datetime.fromtimestamp(cached.expiration_epoch_millis / 1000, tz=timezone.utc)
        document["expires_at"] = expires.isoformat()
        document["valid"] = cached.is_valid_at(now)
        document["remaining_seconds"] = max(0, (cached.expiration_epoch_millis - now) // 1000)
    print_document(document)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``paramauth`` console script.

    Library errors escaping a command exit with their ``exit_code``; any
    other exception exits with :data:`~paramauth.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except ParamAuthError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
