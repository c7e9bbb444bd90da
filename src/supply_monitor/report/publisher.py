from __future__ import annotations

import logging

from rich.console import Console

from ..domain import AggregateReport
from ..settings import OutputFormat, SupplySettings
from .encoder import encode_report_json
from .formatter import print_report_table

logger = logging.getLogger(__name__)


def publish_report(
    settings: SupplySettings,
    report: AggregateReport,
    console: Console | None = None,
) -> None:
    """Write the report to stdout in the configured output format."""
    console = console or Console()
    if settings.output_format == OutputFormat.JSON:
        console.print_json(encode_report_json(report))
    else:
        print_report_table(report, console)
    logger.debug("Published report with %d results", len(report.results))
