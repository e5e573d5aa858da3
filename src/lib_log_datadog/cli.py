"""Click command line for sending Datadog events by hand.

Purpose
-------
Give operators a quick way to verify credentials and endpoint settings by
posting a single event, and expose the package metadata banner.

Contents
--------
* :func:`cli` - command group (``info`` and ``send`` subcommands).
* :func:`main` - test-friendly runner returning an exit code.
* :func:`summary_info` - metadata banner as a string.

System Role
-----------
Presentation layer only: configuration is resolved through
:mod:`lib_log_datadog.config` and delivery through
:class:`lib_log_datadog.transport.DatadogTransport`.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Sequence

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __init__conf__
from . import config as config_module
from .domain.response import DatadogResult

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def summary_info() -> str:
    """Return the metadata banner printed by ``info``.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """
    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


class _ConsoleListener:
    """Print relayed ``DatadogResult`` events as highlighted JSON."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, event_name: str, payload: Any) -> None:
        self._console.print(f"[bold]{event_name}[/bold] HTTP {payload.status_code}")
        if payload.body is not None:
            self._console.print_json(data=payload.body)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--version", "-V", is_flag=True, help="Print the installed version and exit.")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.option("--verbose", "-v", is_flag=True, help="Show the transport's own log output.")
@click.pass_context
def cli(ctx: click.Context, version: bool, use_dotenv: bool | None, verbose: bool) -> None:
    """Send events to the Datadog events API."""

    if version:
        click.echo(f"{__init__conf__.shell_command} version {__init__conf__.version}")
        ctx.exit(0)

    if config_module.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    _configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info")
def info_command() -> None:
    """Print package metadata."""
    click.echo(summary_info(), nl=False)


@cli.command("send")
@click.option("--message", "-m", required=True, help="Event text.")
@click.option("--level", "-l", default="info", show_default=True, help="Severity (silly, debug, verbose, info, warn, warning, error, severe).")
@click.option("--title", help="Event title (defaults to LOG).")
@click.option("--tag", "tags", multiple=True, help="Additional key:value tag; repeatable.")
@click.option("--data", "data_json", help="JSON object appended to the event text.")
@click.option("--api-key", help="Datadog API key (default: $DATADOG_API_KEY).")
@click.option("--app-key", help="Datadog application key (default: $DATADOG_APP_KEY).")
@click.option("--minimum-level", help="Drop events below this severity.")
@click.option("--endpoint", help="Base API URL (default: public datadoghq.com endpoint).")
@click.option("--timeout", type=float, help="Request deadline in seconds.")
@click.option("--text-as-title/--no-text-as-title", default=None, help="Use the message as the event title.")
@click.option("--show-result", is_flag=True, help="Print the parsed API response.")
def send_command(
    *,
    message: str,
    level: str,
    title: str | None,
    tags: tuple[str, ...],
    data_json: str | None,
    api_key: str | None,
    app_key: str | None,
    minimum_level: str | None,
    endpoint: str | None,
    timeout: float | None,
    text_as_title: bool | None,
    show_result: bool,
) -> None:
    """Post a single event and report the outcome."""

    data = _parse_data(data_json)
    try:
        settings = config_module.load_settings(
            api_key=api_key,
            application_key=app_key,
            minimum_log_level=minimum_level,
            api_endpoint=endpoint,
            timeout=timeout,
            use_text_as_title=text_as_title,
        )
        transport = config_module.create_transport(settings)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    console = Console()
    with transport:
        if title:
            transport.options.title = title
        transport.options.tags.extend(tags)
        if show_result:
            transport.receive_results(_ConsoleListener(console))
        future = transport.log(level, message, data)
        if future is None:
            click.echo(f"Skipped: severity {level!r} is below the configured minimum.")
            return
        result: DatadogResult | None = future.result()

    if result is None:
        raise click.ClickException("Event delivery failed; rerun with --verbose for details.")
    if not result.ok:
        raise click.ClickException(f"Datadog rejected the event: HTTP {result.status_code} {result.text}")
    click.echo(f"Sent {level} event (HTTP {result.status_code}).")


def _parse_data(raw: str | None) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--data") from exc


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger(__init__conf__.name)
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group and translate errors into an exit code.

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    lib_log_datadog version ...
    0
    """
    args = list(argv) if argv is not None else None
    try:
        outcome = cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return outcome if isinstance(outcome, int) else 0


__all__ = ["cli", "main", "summary_info"]
