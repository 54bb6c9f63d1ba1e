"""
Table processing for XBRL report pages (R files).

A report page holds one table: header rows with the statement title and the
column dates, then one row per concept. Rows whose concept is an Axis or an
Abstract only set grouping context for the rows that follow them.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from .config import Patterns
from .errors import ConceptIdentifierError, IssueKind, MalformedDocumentError, record_issue
from .models import DataRow, FilingContext, HeaderInfo, ParsedStatement, StatementKind

logger = logging.getLogger(__name__)


# ============================================================================
# TEXT UTILITIES
# ============================================================================

def normalize_text(text: str) -> str:
    """
    Normalize text by removing extra whitespace and invisible Unicode characters.

    This is the canonical version used throughout the package.
    """
    if not text:
        return ""

    # Remove invisible Unicode characters
    invisible_chars = [
        '\u200b',  # Zero-width space
        '\u200c',  # Zero-width non-joiner
        '\u200d',  # Zero-width joiner
        '\ufeff',  # Byte order mark
    ]

    for char in invisible_chars:
        text = text.replace(char, '')

    # Standard whitespace normalization
    return ' '.join(text.split())


def cell_text(cell: Tag) -> str:
    return normalize_text(cell.get_text(separator=' ', strip=True))


def own_rows(table: Tag) -> List[Tag]:
    """Rows of `table` itself, without the rows of tables nested in its cells."""
    return [row for row in table.find_all('tr') if row.find_parent('table') is table]


def is_footnote_row(row: Tag) -> bool:
    """A row whose cell wraps a nested table, such as `table.outerFootnotes`."""
    return row.find('table') is not None


def _colspan(cell: Tag) -> int:
    try:
        return max(int(cell.get('colspan', 1)), 1)
    except (TypeError, ValueError):
        return 1


# ============================================================================
# CONCEPT IDENTIFIERS
# ============================================================================

def extract_concept_id(onclick: Optional[str]) -> str:
    """
    Recover the concept identifier wrapped in an anchor's onclick handler.

    >>> extract_concept_id("top.Show.showAR( this, 'defref_us-gaap_Cash', window );")
    'defref_us-gaap_Cash'

    Raises:
        ConceptIdentifierError: if the attribute is missing or has another shape
    """
    if not onclick:
        raise ConceptIdentifierError("Anchor has no onclick attribute")

    match = Patterns.SHOW_AR.match(onclick)
    if not match:
        raise ConceptIdentifierError(f"Unexpected onclick format: {onclick!r}")
    return match.group(1)


def row_concept_id(label_cell: Tag) -> str:
    """Concept identifier of the row whose first data cell is `label_cell`."""
    anchor = label_cell.find('a', onclick=True)
    if anchor is None:
        raise ConceptIdentifierError("First cell has no concept anchor")
    return extract_concept_id(anchor.get('onclick'))


# ============================================================================
# ROW MARKERS
# ============================================================================

@dataclass
class RowMarkers:
    """Axis and Abstract context inherited by data rows."""
    axis: str = ''
    abstract: str = ''

    def update(self, concept_id: str) -> bool:
        """
        Take over `concept_id` if it is a marker.

        Returns:
            True if the row was a marker row and carries no values
        """
        if 'Axis' in concept_id:
            self.axis = concept_id
            return True
        if 'Abstract' in concept_id:
            self.abstract = concept_id
            return True
        return False


# ============================================================================
# REPORT TABLE PARSING
# ============================================================================

class TableProcessor:
    """Parses a report page into column headers and data rows."""

    def parse(
        self,
        soup: BeautifulSoup,
        kind: StatementKind,
        context: Optional[FilingContext] = None
    ) -> ParsedStatement:
        """
        Parse the report table of one statement.

        Args:
            soup: Parsed report page
            kind: Statement kind (decides the header layout)
            context: Filing context attached to recorded issues

        Returns:
            ParsedStatement with header, data rows and per-row issues

        Raises:
            MalformedDocumentError: no table or no header row
        """
        table = soup.find('table')
        if table is None:
            raise MalformedDocumentError(f"{kind.label}: no table found")

        rows = own_rows(table)
        if not rows:
            raise MalformedDocumentError(f"{kind.label}: table has no rows")

        issues = []
        if kind.is_duration:
            header, body_start = self._parse_duration_header(rows, kind, issues, context)
        else:
            header, body_start = self._parse_instant_header(rows, kind, issues, context)

        logger.debug(f"{kind.label} '{header.title}': {len(header.dates)} date columns")

        data_rows = self._parse_body(rows, body_start, len(header.dates), kind, issues, context)

        logger.info(f"Parsed {len(data_rows)} data rows from {kind.label} '{header.title}'")
        return ParsedStatement(kind=kind, header=header, rows=data_rows, issues=issues)

    @staticmethod
    def _header_cells(row: Tag) -> List[Tag]:
        return row.find_all('th')

    def _parse_instant_header(
        self,
        rows: List[Tag],
        kind: StatementKind,
        issues: list,
        context: Optional[FilingContext]
    ) -> Tuple[HeaderInfo, int]:
        """First row: title cell followed by one cell per instant date."""
        cells = self._header_cells(rows[0])
        if not cells:
            raise MalformedDocumentError(f"{kind.label}: first row has no header cells")

        texts = [cell_text(cell) for cell in cells]
        header = HeaderInfo(title=texts[0], dates=texts[1:])

        if not header.dates:
            record_issue(issues, IssueKind.STRUCTURAL_MISMATCH, kind, 'header',
                         "Header row has no date columns", context)
        return header, 1

    def _parse_duration_header(
        self,
        rows: List[Tag],
        kind: StatementKind,
        issues: list,
        context: Optional[FilingContext]
    ) -> Tuple[HeaderInfo, int]:
        """First row: title and duration labels. Second row: the dates."""
        cells = self._header_cells(rows[0])
        if not cells:
            raise MalformedDocumentError(f"{kind.label}: first row has no header cells")

        title = cell_text(cells[0])
        duration_cells = cells[1:]
        if not duration_cells:
            record_issue(issues, IssueKind.STRUCTURAL_MISMATCH, kind, 'header',
                         "Header row has no duration label", context)

        date_cells = self._header_cells(rows[1]) if len(rows) > 1 else []
        if not date_cells:
            raise MalformedDocumentError(f"{kind.label}: second header row with dates is missing")

        dates = [cell_text(cell) for cell in date_cells]
        duration = cell_text(duration_cells[0]) if duration_cells else ''

        # "3 Months Ended" colspan=2 covers the next two dates
        durations = []
        for cell in duration_cells:
            durations.extend([cell_text(cell)] * _colspan(cell))
        if len(durations) != len(dates):
            durations = [duration] * len(dates)

        header = HeaderInfo(title=title, dates=dates, duration=duration, durations=durations)
        return header, 2

    def _parse_body(
        self,
        rows: List[Tag],
        body_start: int,
        num_dates: int,
        kind: StatementKind,
        issues: list,
        context: Optional[FilingContext]
    ) -> List[DataRow]:
        """Fold the body rows left to right, carrying Axis/Abstract markers forward."""
        markers = RowMarkers()
        data_rows = []

        for row_idx, row in enumerate(rows[body_start:], start=body_start):
            cells = row.find_all('td', recursive=False)
            if not cells:
                logger.debug(f"Row {row_idx}: no data cells, skipping")
                continue

            if is_footnote_row(row):
                logger.debug(f"Row {row_idx}: footnote block, skipping")
                continue

            try:
                concept_id = row_concept_id(cells[0])
            except ConceptIdentifierError as e:
                if not cell_text(row):
                    logger.debug(f"Row {row_idx}: empty spacer row, skipping")
                    continue
                record_issue(issues, IssueKind.STRUCTURAL_MISMATCH, kind,
                             f"row {row_idx}", str(e), context)
                continue

            if markers.update(concept_id):
                logger.debug(f"Row {row_idx}: marker {concept_id}")
                continue

            values = [cell_text(cell) for cell in cells[1:]]
            if len(values) != num_dates:
                record_issue(issues, IssueKind.STRUCTURAL_MISMATCH, kind, concept_id,
                             f"Row {row_idx} has {len(values)} values, expected {num_dates}",
                             context)
                continue

            data_rows.append(DataRow(
                item=cell_text(cells[0]),
                tag=concept_id,
                axis=markers.axis,
                abstract=markers.abstract,
                values=values,
            ))

        return data_rows
