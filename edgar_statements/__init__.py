"""
EDGAR Statement Extractor

Extracts balance sheets, income statements and cash-flow statements from the
XBRL report pages of SEC filings into flat, analytics-ready records.
"""

__version__ = "1.0.0"

# Public API
from .config import ExtractorConfig, STATEMENT_KEYWORDS, StatementKeywords
from .models import (
    BalanceSheetItem,
    ConceptMetadata,
    DataRow,
    FilingContext,
    HeaderInfo,
    IncomeOrCashFlowStatementItem,
    ParsedStatement,
    ReportCatalogEntry,
    StatementKind,
)
from .errors import (
    ConceptIdentifierError,
    EdgarStatementsError,
    ExtractionIssue,
    IssueKind,
    MalformedDocumentError,
    SECClientError,
)
from .statement_finder import StatementFinder, parse_filing_summary
from .table_processor import TableProcessor, extract_concept_id, normalize_text
from .concept_resolver import ConceptMetadataResolver, decode_metadata_block
from .data_extractor import (
    ExtractionContext,
    FilingResult,
    StatementResult,
    assemble_records,
    extract_statement,
    process_single_filing,
    run_extraction,
)
from .filing_index import FilingRef, parse_index_listing
from .sec_client import SECClient
from .export import issues_to_frame, records_to_frame, write_results

__all__ = [
    # Main functions
    'run_extraction',
    'process_single_filing',
    'extract_statement',
    'assemble_records',

    # Configuration
    'ExtractorConfig',
    'STATEMENT_KEYWORDS',
    'StatementKeywords',

    # Components (for advanced usage)
    'StatementFinder',
    'TableProcessor',
    'ConceptMetadataResolver',
    'ExtractionContext',
    'SECClient',

    # Data model
    'StatementKind',
    'ReportCatalogEntry',
    'FilingContext',
    'HeaderInfo',
    'DataRow',
    'ConceptMetadata',
    'ParsedStatement',
    'BalanceSheetItem',
    'IncomeOrCashFlowStatementItem',
    'StatementResult',
    'FilingResult',
    'FilingRef',

    # Errors
    'EdgarStatementsError',
    'MalformedDocumentError',
    'ConceptIdentifierError',
    'SECClientError',
    'IssueKind',
    'ExtractionIssue',

    # Utilities
    'parse_filing_summary',
    'parse_index_listing',
    'extract_concept_id',
    'decode_metadata_block',
    'normalize_text',
    'records_to_frame',
    'issues_to_frame',
    'write_results',
]
