"""
EDGAR full-index listings.

The quarterly `xbrl.idx` lists every XBRL filing of a quarter:

    CIK|Company Name|Form Type|Date Filed|Filename
    --------------------------------------------------------------------------------
    1000045|NICHOLAS FINANCIAL INC|10-Q|2020-02-14|edgar/data/1000045/0001564590-20-004703.txt
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from dateutil.parser import ParserError, parse as parse_date

from .config import SEC_ARCHIVES_URL, Patterns
from .models import FilingContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilingRef:
    """One filing listed in a quarterly index."""
    cik: str
    company_name: str
    form_type: str
    date_filed: Optional[datetime.date]
    file_name: str

    @property
    def accession_number(self) -> str:
        """Accession number without dashes (e.g. '000156459020004703')."""
        match = Patterns.FILING_PATH.match(self.file_name)
        stem = match.group(2) if match else self.file_name.rsplit('/', 1)[-1].replace('.txt', '')
        return stem.replace('-', '')

    @property
    def directory_url(self) -> str:
        """Filing directory holding FilingSummary.xml and the report pages."""
        path = self.file_name.replace('-', '').replace('.txt', '')
        return SEC_ARCHIVES_URL + path

    def context(self, year: int, quarter: int) -> FilingContext:
        return FilingContext(year=year, quarter=quarter, cik=self.cik,
                             accession_number=self.accession_number)


def _parse_filed(text: str) -> Optional[datetime.date]:
    try:
        return parse_date(text).date()
    except (ParserError, ValueError, OverflowError):
        logger.debug(f"Could not parse filing date '{text}'")
        return None


def parse_index_listing(
    text: str,
    forms: Optional[Iterable[str]] = None
) -> List[FilingRef]:
    """
    Decode a full-index listing.

    Args:
        text: Contents of xbrl.idx
        forms: Form types to keep (None = all)

    Returns:
        Filings in listing order
    """
    wanted = {form.upper() for form in forms} if forms is not None else None
    lines = text.splitlines()

    # Records start after the dashed separator
    start = 0
    for i, line in enumerate(lines):
        if Patterns.INDEX_SEPARATOR.match(line):
            start = i + 1
            break
    else:
        logger.warning("Index listing has no separator line, reading from the top")

    filings = []
    for line_no, line in enumerate(lines[start:], start=start + 1):
        if not line.strip():
            continue

        fields = [field.strip() for field in line.split('|')]
        if len(fields) != 5:
            logger.warning(f"Skipping malformed index line {line_no}: '{line[:80]}'")
            continue

        cik, company_name, form_type, date_filed, file_name = fields
        if wanted is not None and form_type.upper() not in wanted:
            continue

        filings.append(FilingRef(
            cik=cik,
            company_name=company_name,
            form_type=form_type,
            date_filed=_parse_filed(date_filed),
            file_name=file_name,
        ))

    logger.info(f"Index lists {len(filings)} matching filings")
    return filings
