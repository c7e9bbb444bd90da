from __future__ import annotations

import json

from ..domain import AggregateReport


def encode_report_json(report: AggregateReport, indent: int | None = 2) -> str:
    """Serialize a report as ``{"data": [...], "timestamp": ms}``."""
    return json.dumps(report.to_dict(), indent=indent)
