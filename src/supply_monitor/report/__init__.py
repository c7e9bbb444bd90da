from __future__ import annotations

from .encoder import encode_report_json
from .formatter import format_supply, format_supply_full, print_report_table
from .publisher import publish_report

__all__ = [
    "encode_report_json",
    "format_supply",
    "format_supply_full",
    "print_report_table",
    "publish_report",
]
