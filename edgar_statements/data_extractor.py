"""
Main orchestration for extracting financial statement records from EDGAR filings.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from bs4 import BeautifulSoup

from .concept_resolver import ConceptMetadataResolver
from .config import ExtractorConfig
from .errors import (
    EdgarStatementsError, ExtractionIssue, IssueKind, MalformedDocumentError, record_issue,
)
from .filing_index import FilingRef, parse_index_listing
from .models import (
    BalanceSheetItem, ConceptMetadata, DataRow, FilingContext, HeaderInfo,
    IncomeOrCashFlowStatementItem, StatementKind,
)
from .sec_client import SECClient
from .statement_finder import StatementFinder
from .table_processor import TableProcessor

logger = logging.getLogger(__name__)

EMPTY_METADATA = ConceptMetadata()


# ============================================================================
# CONTEXT AND RESULTS
# ============================================================================

@dataclass
class ExtractionContext:
    """Components shared by every filing of a run."""
    config: ExtractorConfig = field(default_factory=ExtractorConfig)
    statement_finder: StatementFinder = field(init=False)
    table_processor: TableProcessor = field(init=False)
    concept_resolver: ConceptMetadataResolver = field(init=False)

    def __post_init__(self):
        self.statement_finder = StatementFinder()
        self.table_processor = TableProcessor()
        self.concept_resolver = ConceptMetadataResolver()


@dataclass
class StatementResult:
    """Records and issues of one statement."""
    kind: StatementKind
    records: list = field(default_factory=list)
    issues: List[ExtractionIssue] = field(default_factory=list)


@dataclass
class FilingResult:
    """Records per statement kind and issues of one or more filings."""
    records: Dict[StatementKind, list] = field(
        default_factory=lambda: {kind: [] for kind in StatementKind}
    )
    issues: List[ExtractionIssue] = field(default_factory=list)
    filings_processed: int = 0

    def add_statement(self, result: StatementResult):
        self.records[result.kind].extend(result.records)
        self.issues.extend(result.issues)

    def merge(self, other: 'FilingResult'):
        for kind, records in other.records.items():
            self.records.setdefault(kind, []).extend(records)
        self.issues.extend(other.issues)
        self.filings_processed += other.filings_processed

    @property
    def record_count(self) -> int:
        return sum(len(records) for records in self.records.values())

    def issue_counts(self) -> Counter:
        return Counter(issue.kind for issue in self.issues)


# ============================================================================
# RECORD ASSEMBLY
# ============================================================================

def assemble_records(
    rows: Sequence[DataRow],
    header: HeaderInfo,
    metadata: Mapping[str, ConceptMetadata],
    context: FilingContext,
    kind: StatementKind
) -> list:
    """
    Flatten data rows into one record per (date, item) pair.

    Records are ordered date-major, item-minor: every item of the first date
    column, then every item of the second, matching the table's layout.

    Args:
        rows: Data rows of the table
        header: Title, dates and durations
        metadata: Concept metadata by tag (missing tags get empty fields)
        context: Filing year, quarter and CIK
        kind: Statement kind (duration-style kinds get a Duration field)

    Returns:
        BalanceSheetItem or IncomeOrCashFlowStatementItem records
    """
    records = []

    for ii, date in enumerate(header.dates):
        for row in rows:
            concept = metadata.get(row.tag, EMPTY_METADATA)
            fields = dict(
                year=context.year,
                quarter=context.quarter,
                cik=context.cik,
                title=header.title,
                date=date,
                item=row.item,
                value=row.values[ii],
                axis=row.axis,
                abstract=row.abstract,
                tag=row.tag,
                definition=concept.definition,
                data_type=concept.data_type,
                balance_type=concept.balance_type,
                period_type=concept.period_type,
            )
            if kind.is_duration:
                records.append(IncomeOrCashFlowStatementItem(duration=header.duration_for(ii), **fields))
            else:
                records.append(BalanceSheetItem(**fields))

    return records


# ============================================================================
# DATA EXTRACTION
# ============================================================================

def extract_statement(
    soup: BeautifulSoup,
    kind: StatementKind,
    filing_context: FilingContext,
    context: Optional[ExtractionContext] = None
) -> StatementResult:
    """
    Parse one report page into output records.

    Args:
        soup: Parsed report page
        kind: Statement kind of the page
        filing_context: Filing year, quarter and CIK
        context: Shared components (a default context if None)

    Returns:
        StatementResult; a malformed page yields no records and one issue
    """
    context = context or ExtractionContext()
    result = StatementResult(kind=kind)

    try:
        parsed = context.table_processor.parse(soup, kind, filing_context)
    except MalformedDocumentError as e:
        record_issue(result.issues, IssueKind.MALFORMED_DOCUMENT, kind, kind.value,
                     str(e), filing_context)
        return result

    result.issues.extend(parsed.issues)

    metadata, metadata_issues = context.concept_resolver.resolve(
        soup, parsed.tags, kind, filing_context
    )
    result.issues.extend(metadata_issues)

    result.records = assemble_records(parsed.rows, parsed.header, metadata, filing_context, kind)
    logger.info(f"Extracted {len(result.records)} records from {kind.label} "
                f"({len(parsed.rows)} items x {len(parsed.header.dates)} dates)")
    return result


def process_single_filing(
    filing: FilingRef,
    filing_context: FilingContext,
    sec_client: SECClient,
    context: Optional[ExtractionContext] = None
) -> FilingResult:
    """
    Process one filing: locate the three statements, fetch and extract each.

    Args:
        filing: Filing listed in the quarterly index
        filing_context: Year, quarter and CIK attached to the records
        sec_client: Client for fetching documents
        context: Shared components

    Returns:
        FilingResult with the records found and every issue recorded
    """
    context = context or ExtractionContext()
    result = FilingResult(filings_processed=1)

    logger.info(f"\n{'='*80}")
    logger.info(f"Processing {filing.company_name} ({filing.form_type}, filed {filing.date_filed})")
    logger.info(f"Directory: {filing.directory_url}")
    logger.info(f"{'='*80}")

    try:
        catalog = sec_client.get_filing_summary(filing.directory_url)
    except EdgarStatementsError as e:
        record_issue(result.issues, IssueKind.MALFORMED_DOCUMENT, None, 'FilingSummary.xml',
                     str(e), filing_context)
        return result

    report_urls = context.statement_finder.resolve(catalog, filing.directory_url)

    for kind in context.statement_finder.missing(report_urls):
        record_issue(result.issues, IssueKind.STATEMENT_NOT_FOUND, kind, kind.value,
                     "No matching report in filing summary", filing_context)

    for kind, url in report_urls.items():
        try:
            soup = sec_client.get_report(url)
        except EdgarStatementsError as e:
            record_issue(result.issues, IssueKind.MALFORMED_DOCUMENT, kind, url,
                         str(e), filing_context)
            continue

        result.add_statement(extract_statement(soup, kind, filing_context, context))

    return result


# ============================================================================
# MAIN EXTRACTION ORCHESTRATION
# ============================================================================

def run_extraction(
    year: int,
    quarter: int,
    config: Optional[ExtractorConfig] = None,
    sec_client: Optional[SECClient] = None
) -> FilingResult:
    """
    Extract the statements of every matching filing of one quarter.

    Args:
        year: Filing year
        quarter: Calendar quarter 1-4
        config: Optional extraction configuration
        sec_client: Optional client (built from config if None)

    Returns:
        Aggregated FilingResult
    """
    if config is None:
        config = ExtractorConfig()

    sec_client = sec_client or SECClient(config)
    context = ExtractionContext(config=config)

    listing = sec_client.get_index_listing(year, quarter)
    filings = parse_index_listing(listing, config.forms)
    if not filings:
        logger.error(f"No {'/'.join(config.forms)} filings listed for {year} QTR{quarter}")
        return FilingResult()

    total = FilingResult()
    max_filings = config.max_filings or len(filings)

    for filing in filings[:max_filings]:
        filing_context = filing.context(year, quarter)
        try:
            total.merge(process_single_filing(filing, filing_context, sec_client, context))
        except EdgarStatementsError as e:
            logger.error(f"Failed to process filing {filing.file_name}: {e}")
            record_issue(total.issues, IssueKind.MALFORMED_DOCUMENT, None, filing.file_name,
                         str(e), filing_context)

    logger.info(f"Processed {total.filings_processed} filings, extracted {total.record_count} records")
    for kind, count in sorted(total.issue_counts().items(), key=lambda item: item[0].value):
        logger.info(f"  {kind.value}: {count}")

    return total

