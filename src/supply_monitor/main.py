"""CLI entrypoint for supply-monitor."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Annotated, Any

import typer

from .logger import setup_logging
from .settings import OutputFormat, SupplySettings
from .state import AppState

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Aggregate a token's total supply across every configured chain.",
)


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return logging.getLogger("supply_monitor")


@app.callback(invoke_without_command=True)
def report(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include a [supply_monitor] table).",
        ),
    ] = None,
    tokens: Annotated[
        list[str] | None,
        typer.Option(
            "--token",
            "-t",
            help="Only query chains for this token. Repeat for several tokens.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format (table or json)."),
    ] = None,
    rpc_timeout: Annotated[
        float | None,
        typer.Option(
            "--rpc-timeout",
            help="Per-request timeout in seconds for chain RPC/REST calls.",
        ),
    ] = None,
    max_concurrency: Annotated[
        int | None,
        typer.Option(
            "--max-concurrency",
            help="Maximum number of chains queried at once (default: all).",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config and exit.",
        ),
    ] = False,
):
    """Fetch the current supply on every configured chain and print a report.

    Chains that fail are reported with their error; the command still
    succeeds as long as at least one chain is configured.
    """
    if config_path:
        os.environ["SUPPLY_MONITOR_CONFIG"] = str(config_path)

    init_kwargs: dict[str, Any] = {}
    if tokens:
        init_kwargs["tokens"] = tokens
    if output_format is not None:
        init_kwargs["output_format"] = output_format
    if rpc_timeout is not None:
        init_kwargs["rpc_timeout_seconds"] = rpc_timeout
    if max_concurrency is not None:
        init_kwargs["max_concurrency"] = max_concurrency
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    settings = SupplySettings(**init_kwargs)

    setup_logging(settings.log_level)
    logger = _build_logger()
    state = AppState(settings=settings, logger=logger)

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    if not settings.selected_chains():
        raise typer.BadParameter(
            "no chains configured (or none match the --token filter)",
            param_hint=["--config", "SUPPLY_MONITOR_CONFIG"],
        )

    from .pipeline.run import run_report

    asyncio.run(run_report(state))


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
