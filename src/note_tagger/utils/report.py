"""
Batch report for tagging runs.

Turns the per-note outcomes of a batch into a table and writes it as CSV,
one row per note:

    path, state, existing_tags, proposed_tags, applied_tags, error, status_code, message

Tag lists are joined with "; " so the file opens cleanly in a spreadsheet.
"""

import sys
from pathlib import Path
from typing import Iterable

import pandas as pd

from ..tagging.orchestrator import BatchResult, TaggingOutcome


REPORT_COLUMNS = [
    "path",
    "state",
    "existing_tags",
    "proposed_tags",
    "applied_tags",
    "error",
    "status_code",
    "message",
]

TAG_SEPARATOR = "; "


def outcomes_to_frame(outcomes: Iterable[TaggingOutcome]) -> pd.DataFrame:
    """
    Build a DataFrame from tagging outcomes.

    Args:
        outcomes: Outcomes from TaggingOrchestrator

    Returns:
        DataFrame with REPORT_COLUMNS, in outcome order
    """
    rows = []
    for outcome in outcomes:
        rows.append({
            "path": outcome.path,
            "state": outcome.state.value,
            "existing_tags": TAG_SEPARATOR.join(outcome.existing_tags),
            "proposed_tags": TAG_SEPARATOR.join(outcome.proposed_tags),
            "applied_tags": TAG_SEPARATOR.join(outcome.applied_tags),
            "error": outcome.error or "",
            "status_code": outcome.status_code or "",
            "message": outcome.message,
        })
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def write_report(result: BatchResult, csv_path: Path, verbose: bool = False) -> pd.DataFrame:
    """
    Write a batch result to CSV.

    Args:
        result: BatchResult from TaggingOrchestrator.tag_documents
        csv_path: Destination file (parent directories are created)
        verbose: If True, print a per-state breakdown to stderr

    Returns:
        The DataFrame that was written
    """
    df = outcomes_to_frame(result.outcomes)

    csv_path = Path(csv_path)
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(csv_path, index=False)

    if verbose:
        print(f"Report written to: {csv_path}", file=sys.stderr)
        for state, count in df["state"].value_counts().sort_index().items():
            print(f"  {state}: {count}", file=sys.stderr)

    return df
