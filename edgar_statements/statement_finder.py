"""
Statement finder using the filing summary.
Locates the balance sheet, income statement and cash-flow statement report pages.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from bs4 import BeautifulSoup

from .config import STATEMENT_KEYWORDS, StatementKeywords
from .errors import MalformedDocumentError
from .models import ReportCatalogEntry, StatementKind
from .table_processor import normalize_text

logger = logging.getLogger(__name__)


# ============================================================================
# FILING SUMMARY
# ============================================================================

def _child_text(report, name: str) -> str:
    child = report.find(name, recursive=False)
    return normalize_text(child.get_text()) if child else ''


def parse_filing_summary(xml_content) -> List[ReportCatalogEntry]:
    """
    Decode FilingSummary.xml into catalog entries.

    Args:
        xml_content: Raw XML (str or bytes)

    Returns:
        Reports that have an HTML page, in document order
    """
    soup = BeautifulSoup(xml_content, 'lxml-xml')
    root = soup.find('FilingSummary')
    if root is None:
        raise MalformedDocumentError("Document has no FilingSummary element")

    entries = []
    my_reports = root.find('MyReports')
    reports = my_reports.find_all('Report', recursive=False) if my_reports else []

    for report in reports:
        html_file_name = _child_text(report, 'HtmlFileName')
        if not html_file_name:
            logger.debug(f"Skipping report without HTML page: '{_child_text(report, 'LongName')}'")
            continue

        entries.append(ReportCatalogEntry(
            long_name=_child_text(report, 'LongName'),
            html_file_name=html_file_name,
        ))

    logger.debug(f"Filing summary lists {len(entries)} report pages")
    return entries


# ============================================================================
# CATALOG RESOLUTION
# ============================================================================

class StatementFinder:
    """Finds the report page of each statement kind in a filing summary."""

    def __init__(self, keywords: Optional[Mapping[StatementKind, StatementKeywords]] = None):
        """
        Initialize statement finder.

        Args:
            keywords: Title fragments per statement kind (defaults to STATEMENT_KEYWORDS)
        """
        self.keywords = dict(keywords or STATEMENT_KEYWORDS)

    def resolve(
        self,
        catalog: Sequence[ReportCatalogEntry],
        base_url: str
    ) -> Dict[StatementKind, str]:
        """
        Find the first matching report URL for every statement kind.

        Args:
            catalog: Reports in filing-summary order
            base_url: Filing directory URL the page names are relative to

        Returns:
            Mapping of resolved kinds to report URLs; unresolved kinds are absent
        """
        resolved: Dict[StatementKind, str] = {}

        for entry in catalog:
            for kind, keywords in self.keywords.items():
                if kind in resolved or not keywords.matches(entry.long_name):
                    continue
                resolved[kind] = report_url(base_url, entry.html_file_name)
                logger.info(f"Found {kind.label}: '{entry.long_name}' ({entry.html_file_name})")

            if len(resolved) == len(self.keywords):
                break

        for kind in self.missing(resolved):
            logger.warning(f"No report in filing summary matches {kind.label}")

        return resolved

    def missing(self, resolved: Mapping[StatementKind, str]) -> List[StatementKind]:
        """Statement kinds without a resolved URL."""
        return [kind for kind in self.keywords if kind not in resolved]


def report_url(base_url: str, html_file_name: str) -> str:
    return f"{base_url.rstrip('/')}/{html_file_name}"
