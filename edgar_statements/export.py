"""
Flattening of output records and issues into DataFrames and CSV files.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Sequence

import pandas as pd

from .config import ISSUES_FILE, OUTPUT_FILES
from .errors import ExtractionIssue
from .models import BALANCE_SHEET_COLUMNS, DURATION_STATEMENT_COLUMNS, StatementKind

logger = logging.getLogger(__name__)

ISSUE_COLUMNS = [
    'Year', 'Quarter', 'CIK', 'AccessionNumber', 'Statement', 'Kind', 'Identifier', 'Message',
]


def columns_for(kind: StatementKind) -> list:
    return DURATION_STATEMENT_COLUMNS if kind.is_duration else BALANCE_SHEET_COLUMNS


def records_to_frame(records: Sequence, kind: StatementKind) -> pd.DataFrame:
    """DataFrame of output records in warehouse column order; record order is kept."""
    return pd.DataFrame([record.as_row() for record in records], columns=columns_for(kind))


def issues_to_frame(issues: Iterable[ExtractionIssue]) -> pd.DataFrame:
    return pd.DataFrame([issue.as_row() for issue in issues], columns=ISSUE_COLUMNS)


def write_results(result, output_dir) -> Dict[str, Path]:
    """
    Write one CSV per statement kind plus the issue list.

    Args:
        result: FilingResult of a run
        output_dir: Target directory (created if missing)

    Returns:
        Mapping of file name to written path
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written = {}

    for kind, filename in OUTPUT_FILES.items():
        df = records_to_frame(result.records.get(kind, []), kind)
        path = output_dir / filename
        df.to_csv(path, index=False)
        written[filename] = path
        logger.info(f"Saved {len(df)} {kind.label} records to '{path}'")

    issues_df = issues_to_frame(result.issues)
    path = output_dir / ISSUES_FILE
    issues_df.to_csv(path, index=False)
    written[ISSUES_FILE] = path
    logger.info(f"Saved {len(issues_df)} issues to '{path}'")

    return written
