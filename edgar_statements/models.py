"""
Data structures shared by the statement locator, table parser and record assembler.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .errors import ExtractionIssue


class StatementKind(Enum):
    """The three financial statements extracted from every filing."""
    BALANCE_SHEET = 'balance_sheet'
    INCOME_STATEMENT = 'income_statement'
    CASH_FLOW_STATEMENT = 'cash_flow_statement'

    @property
    def is_duration(self) -> bool:
        """Income and cash-flow columns cover periods, balance sheet columns are instants."""
        return self is not StatementKind.BALANCE_SHEET

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ').title()


@dataclass(frozen=True)
class ReportCatalogEntry:
    """One generated report page listed in FilingSummary.xml."""
    long_name: str
    html_file_name: str


@dataclass(frozen=True)
class FilingContext:
    """Identifies the filing a record was extracted from."""
    year: int
    quarter: int
    cik: str
    accession_number: str = ''


@dataclass
class HeaderInfo:
    """Column headers of a report table."""
    title: str
    dates: List[str]
    duration: str = ''
    # One duration label per date column (duration-style tables only)
    durations: List[str] = field(default_factory=list)

    def duration_for(self, column: int) -> str:
        if column < len(self.durations):
            return self.durations[column]
        return self.duration


@dataclass
class DataRow:
    """A value-carrying table row with the marker context it inherited."""
    item: str
    tag: str
    axis: str
    abstract: str
    values: List[str]


@dataclass(frozen=True)
class ConceptMetadata:
    """Definition block of one XBRL concept."""
    definition: str = ''
    data_type: str = ''
    balance_type: str = ''
    period_type: str = ''


@dataclass
class ParsedStatement:
    """Result of parsing one report page."""
    kind: StatementKind
    header: HeaderInfo
    rows: List[DataRow]
    issues: List['ExtractionIssue'] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.header.title

    @property
    def tags(self) -> List[str]:
        return [row.tag for row in self.rows]


# ============================================================================
# OUTPUT RECORDS
# ============================================================================

@dataclass(frozen=True)
class BalanceSheetItem:
    """One (item, date) cell of a balance sheet."""
    year: int
    quarter: int
    cik: str
    title: str
    date: str
    item: str
    value: str
    axis: str
    abstract: str
    tag: str
    definition: str
    data_type: str
    balance_type: str
    period_type: str

    def as_row(self) -> 'OrderedDict[str, object]':
        """Flatten into warehouse column names."""
        return OrderedDict([
            ('Year', self.year),
            ('Quarter', self.quarter),
            ('CIK', self.cik),
            ('Title', self.title),
            ('Date', self.date),
            ('Item', self.item),
            ('Value', self.value),
            ('Axis', self.axis),
            ('Abstract', self.abstract),
            ('Tag', self.tag),
            ('Definition', self.definition),
            ('DataType', self.data_type),
            ('BalanceType', self.balance_type),
            ('PeriodType', self.period_type),
        ])


@dataclass(frozen=True)
class IncomeOrCashFlowStatementItem:
    """One (item, date) cell of an income or cash-flow statement."""
    year: int
    quarter: int
    cik: str
    title: str
    date: str
    item: str
    value: str
    duration: str
    axis: str
    abstract: str
    tag: str
    definition: str
    data_type: str
    balance_type: str
    period_type: str

    def as_row(self) -> 'OrderedDict[str, object]':
        """Flatten into warehouse column names."""
        return OrderedDict([
            ('Year', self.year),
            ('Quarter', self.quarter),
            ('CIK', self.cik),
            ('Title', self.title),
            ('Date', self.date),
            ('Item', self.item),
            ('Value', self.value),
            ('Duration', self.duration),
            ('Axis', self.axis),
            ('Abstract', self.abstract),
            ('Tag', self.tag),
            ('Definition', self.definition),
            ('DataType', self.data_type),
            ('BalanceType', self.balance_type),
            ('PeriodType', self.period_type),
        ])


BALANCE_SHEET_COLUMNS = [
    'Year', 'Quarter', 'CIK', 'Title', 'Date', 'Item', 'Value',
    'Axis', 'Abstract', 'Tag', 'Definition', 'DataType', 'BalanceType', 'PeriodType',
]

DURATION_STATEMENT_COLUMNS = [
    'Year', 'Quarter', 'CIK', 'Title', 'Date', 'Item', 'Value', 'Duration',
    'Axis', 'Abstract', 'Tag', 'Definition', 'DataType', 'BalanceType', 'PeriodType',
]
