"""Rich console formatter for supply reports."""

from __future__ import annotations

from datetime import datetime, timezone

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from ..domain import AggregateReport


def format_supply(value: float) -> str:
    """Compact dollar-style supply, e.g. ``$1.23B``."""
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if value >= threshold:
            return f"${value / threshold:.2f}{suffix}"
    return f"${value:.2f}"


def format_supply_full(value: float) -> str:
    """Whole-unit supply with thousands separators."""
    return f"${value:,.0f}"


def format_percent(value: float) -> str:
    prefix = "+" if value > 0 else ""
    return f"{prefix}{value:.2f}%"


def truncate_address(address: str, chars: int = 6) -> str:
    """Truncate address for display."""
    if len(address) <= chars * 2 + 3:
        return address
    return f"{address[:chars]}...{address[-chars:]}"


def build_report_renderable(report: AggregateReport) -> Panel:
    """Build the summary and per-chain tables for a report."""
    summary_table = Table(expand=True)
    summary_table.add_column("Token", style="cyan", no_wrap=True)
    summary_table.add_column("Total Supply", justify="right", style="green")
    summary_table.add_column("Exact", justify="right", style="dim")
    summary_table.add_column("Chains", justify="right")

    for summary in report.summaries():
        chains = f"{summary.chains_reporting}/{summary.chains_configured}"
        if summary.chains_failed:
            chains = f"[yellow]{chains}[/]"
        summary_table.add_row(
            summary.token,
            format_supply(summary.total_supply),
            format_supply_full(summary.total_supply),
            chains,
        )

    grand_total = sum(s.total_supply for s in report.summaries())

    chain_table = Table(expand=True, show_lines=False)
    chain_table.add_column("Chain", style="cyan", no_wrap=True)
    chain_table.add_column("Token", no_wrap=True)
    chain_table.add_column("Contract", style="dim")
    chain_table.add_column("Supply", justify="right")
    chain_table.add_column("Share", justify="right", style="yellow")

    for result in report.results:
        if result.supply is None:
            supply_cell = f"[red]error:[/] {result.error}"
            share_cell = "-"
        else:
            supply_cell = f"[green]{format_supply(result.supply)}[/]"
            share = (result.supply / grand_total * 100) if grand_total else 0.0
            share_cell = f"{share:.2f}%"
        chain_table.add_row(
            result.chain_name,
            result.token,
            truncate_address(result.contract_address),
            supply_cell,
            share_cell,
        )

    taken_at = datetime.fromtimestamp(report.timestamp / 1000, tz=timezone.utc)
    return Panel(
        Group(
            Panel(summary_table, title="[bold]Summary[/]", border_style="green"),
            "",
            Panel(chain_table, title="[bold]Chains[/]", border_style="cyan"),
        ),
        title="[bold white]Token Supply[/]",
        subtitle=f"[dim]{taken_at:%Y-%m-%d %H:%M:%S} UTC[/]",
        border_style="white",
        padding=(1, 2),
    )


def print_report_table(report: AggregateReport, console: Console | None = None) -> None:
    """Print the rich formatted report to stdout."""
    console = console or Console()
    console.print()
    console.print(build_report_renderable(report))
    console.print()
