"""
Concept metadata lookup in the definition blocks of a report page.

Each concept linked from the report table has a hidden block further down the
page, keyed by the concept identifier:

    <table class="authRefData" id="defref_us-gaap_Cash">
      <tr><td class="hide">...</td></tr>
      <tr><td><div class="body">
        <a>- Definition</a><div><p>Definition text</p></div>
        <a>+ References</a><div>...</div>
        <a>+ Details</a><div><table>
          <tr><td>Name:</td><td>us-gaap_Cash</td></tr>
          <tr><td>Namespace Prefix:</td><td>us-gaap_</td></tr>
          <tr><td>Data Type:</td><td>xbrli:monetaryItemType</td></tr>
          <tr><td>Balance Type:</td><td>debit</td></tr>
          <tr><td>Period Type:</td><td>instant</td></tr>
        </table></div>
      </div></td></tr>
    </table>
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from .config import Patterns
from .errors import ExtractionIssue, IssueKind, record_issue
from .models import ConceptMetadata, FilingContext, StatementKind
from .table_processor import cell_text

logger = logging.getLogger(__name__)

DEFINITION_DIV = 0
DETAILS_DIV = 2

# Fallback row positions when the details table carries no labels
DATA_TYPE_ROW = 2
BALANCE_TYPE_ROW = 3
PERIOD_TYPE_ROW = 4


def _detail_label(cell: Tag) -> str:
    match = Patterns.DETAIL_LABEL.match(cell_text(cell))
    return match.group(1).lower() if match else ''


def decode_metadata_block(body: Tag) -> Optional[ConceptMetadata]:
    """
    Decode the `div.body` block of one concept.

    The first nested div holds the definition paragraph, the third nested div
    the details table. Details are read by their row label; tables without
    labels are read at the fixed positions of Data Type, Balance Type and
    Period Type. A missing Balance Type row leaves that field empty.

    Args:
        body: The `div.body` element

    Returns:
        ConceptMetadata, or None if the details table is missing
    """
    divs = body.find_all('div')
    if len(divs) <= DETAILS_DIV:
        return None

    paragraph = divs[DEFINITION_DIV].find('p')
    definition = cell_text(paragraph) if paragraph else ''

    details = divs[DETAILS_DIV].find('table')
    if details is None:
        return None

    rows = [row.find_all('td') for row in details.find_all('tr')]
    labelled = {
        _detail_label(cells[0]): cell_text(cells[1])
        for cells in rows if len(cells) >= 2
    }

    if any(label in labelled for label in ('data type', 'balance type', 'period type')):
        return ConceptMetadata(
            definition=definition,
            data_type=labelled.get('data type', ''),
            balance_type=labelled.get('balance type', ''),
            period_type=labelled.get('period type', ''),
        )

    def positional(index: int) -> str:
        if index < len(rows) and len(rows[index]) >= 2:
            return cell_text(rows[index][1])
        return ''

    return ConceptMetadata(
        definition=definition,
        data_type=positional(DATA_TYPE_ROW),
        balance_type=positional(BALANCE_TYPE_ROW),
        period_type=positional(PERIOD_TYPE_ROW),
    )


def find_metadata_body(soup: BeautifulSoup, tag: str) -> Optional[Tag]:
    """Locate the `div.body` block of concept `tag`, or None."""
    anchor_table = soup.find('table', id=tag)
    if anchor_table is None:
        return None

    first_row = anchor_table.find('tr')
    content_row = first_row.find_next_sibling('tr') if first_row else None
    if content_row is None:
        return None

    return content_row.find('div', class_='body')


class ConceptMetadataResolver:
    """Resolves definition, data type, balance type and period type per concept."""

    def resolve(
        self,
        soup: BeautifulSoup,
        tags: Sequence[str],
        kind: Optional[StatementKind] = None,
        context: Optional[FilingContext] = None
    ) -> Tuple[Dict[str, ConceptMetadata], List[ExtractionIssue]]:
        """
        Look up metadata for every distinct tag, in order of first occurrence.

        Args:
            soup: Parsed report page
            tags: Concept identifiers of the data rows
            kind: Statement kind, for issue records
            context: Filing context, for issue records

        Returns:
            (metadata by tag, issues); unresolved tags map to empty metadata
        """
        metadata: Dict[str, ConceptMetadata] = {}
        issues: List[ExtractionIssue] = []

        for tag in tags:
            if tag in metadata:
                continue

            body = find_metadata_body(soup, tag)
            decoded = decode_metadata_block(body) if body is not None else None

            if decoded is None:
                reason = "no definition block" if body is None else "definition block has no details table"
                record_issue(issues, IssueKind.CONCEPT_NOT_FOUND, kind, tag, reason, context)
                decoded = ConceptMetadata()

            metadata[tag] = decoded

        logger.debug(f"Resolved metadata for {len(metadata) - len(issues)}/{len(metadata)} concepts")
        return metadata, issues
