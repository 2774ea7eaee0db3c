"""Utility modules for reporting and other helpers."""

from .report import (
    REPORT_COLUMNS,
    outcomes_to_frame,
    write_report,
)

__all__ = [
    "REPORT_COLUMNS",
    "outcomes_to_frame",
    "write_report",
]
