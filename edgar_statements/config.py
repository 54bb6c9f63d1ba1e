"""
Configuration and constants for EDGAR statement extraction.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .models import StatementKind

# ============================================================================
# USER AGENT
# ============================================================================

# SEC requires a custom User-Agent for all requests
# Replace with your actual information
HEADERS = {'User-Agent': 'Your Name your.email@example.com'}


# ============================================================================
# EDGAR LOCATIONS
# ============================================================================

SEC_ARCHIVES_URL = "https://www.sec.gov/Archives/"
FULL_INDEX_URL = SEC_ARCHIVES_URL + "edgar/full-index/"
FILING_SUMMARY_NAME = "FilingSummary.xml"


# ============================================================================
# REGEX PATTERNS
# ============================================================================

class Patterns:
    """Pre-compiled regex patterns for performance."""

    # top.Show.showAR( this, 'defref_us-gaap_Cash', window );
    SHOW_AR = re.compile(
        r"^\s*top\.Show\.showAR\(\s*this\s*,\s*'([^']+)'\s*,\s*window\s*\)\s*;?\s*$"
    )

    # Dashed line separating the full-index preamble from its records
    INDEX_SEPARATOR = re.compile(r'^-{3,}\s*$')

    # edgar/data/<cik>/<accession>.txt
    FILING_PATH = re.compile(r'^edgar/data/(\d+)/([\d-]+)\.txt$')

    # Details table labels ("Data Type:")
    DETAIL_LABEL = re.compile(r'^\s*(.+?)\s*:?\s*$')


# ============================================================================
# STATEMENT KEYWORDS
# ============================================================================

@dataclass(frozen=True)
class StatementKeywords:
    """Title fragments identifying one statement kind in a filing summary."""
    fragments: Tuple[str, ...]
    exclusions: Tuple[str, ...] = ()

    def matches(self, title: str) -> bool:
        text = title.lower()
        if any(excluded in text for excluded in self.exclusions):
            return False
        return any(fragment in text for fragment in self.fragments)


# Order of the fragments is irrelevant for matching; order of the kinds is the
# order statements are processed in.
STATEMENT_KEYWORDS: Dict[StatementKind, StatementKeywords] = {
    StatementKind.BALANCE_SHEET: StatementKeywords(
        fragments=(
            'balance sheet',
            'statements of financial condition',
            'statements of condition',
        ),
        exclusions=('parenthetical',),
    ),
    StatementKind.INCOME_STATEMENT: StatementKeywords(
        fragments=(
            'statements of income',
            'statements of operation',
            'statement of income',
            'statements of earnings',
            'statements of comprehensive loss',
            'statement of operations and comprehensive loss',
        ),
    ),
    StatementKind.CASH_FLOW_STATEMENT: StatementKeywords(
        fragments=(
            'statements of cash flow',
            'statement of cash flow',
        ),
    ),
}


# ============================================================================
# OUTPUT FILES
# ============================================================================

OUTPUT_FILES = {
    StatementKind.BALANCE_SHEET: 'balance-sheet.csv',
    StatementKind.INCOME_STATEMENT: 'income-statement.csv',
    StatementKind.CASH_FLOW_STATEMENT: 'cash-flow-statement.csv',
}
ISSUES_FILE = 'issues.csv'


# ============================================================================
# EXTRACTOR CONFIGURATION
# ============================================================================

@dataclass
class ExtractorConfig:
    """Configuration for an extraction run."""

    # User-Agent sent to the SEC (None = config.HEADERS)
    user_agent: Optional[str] = None

    # SEC fair-access policy allows 10 requests per second
    requests_per_second: float = 10.0

    # Per-request timeout in seconds
    timeout: float = 30.0

    # Retries for throttled (429) or failed (5xx) requests
    max_retries: int = 3

    # Form types taken from the quarterly index
    forms: Tuple[str, ...] = ('10-K', '10-Q')

    # Maximum number of filings to process per run (None = all)
    max_filings: Optional[int] = None

    # Directory receiving the CSV files
    output_dir: str = 'output'

    # Enable verbose logging
    verbose: bool = False

    def __post_init__(self):
        if self.requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        if self.max_filings is not None and self.max_filings <= 0:
            self.max_filings = None
        self.forms = tuple(form.upper() for form in self.forms)

    @property
    def min_interval(self) -> float:
        """Minimum number of seconds between two requests."""
        return 1.0 / self.requests_per_second
