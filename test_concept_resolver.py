import unittest
from pathlib import Path

from bs4 import BeautifulSoup

from edgar_statements import (
    ConceptMetadata,
    ConceptMetadataResolver,
    IssueKind,
    StatementKind,
    decode_metadata_block,
)
from edgar_statements.concept_resolver import find_metadata_body

TESTDATA = Path(__file__).parent / 'testdata'


def definition_block(concept_id, definition, detail_rows, with_details=True):
    """One hidden definition table as it appears below a report table."""
    details = ''.join(
        f'<tr><td>{label}</td><td>{value}</td></tr>' for label, value in detail_rows
    )
    details_div = f'<a>+ Details</a><div><table>{details}</table></div>' if with_details else ''
    return (
        f'<table class="authRefData" id="{concept_id}">'
        '<tr><td class="hide"><a>X</a></td></tr>'
        '<tr><td><div class="body">'
        f'<a>- Definition</a><div><p>{definition}</p></div>'
        '<a>+ References</a><div><p>Reference 1</p></div>'
        f'{details_div}'
        '</div></td></tr></table>'
    )


def page(*blocks) -> BeautifulSoup:
    return BeautifulSoup('<html><body><table class="report"></table>'
                         + ''.join(blocks) + '</body></html>', 'html.parser')


LABELLED_CASH = [
    ('<strong> Name:</strong>', 'us-gaap_Cash'),
    ('<strong> Namespace Prefix:</strong>', 'us-gaap_'),
    ('<strong> Data Type:</strong>', 'xbrli:monetaryItemType'),
    ('<strong> Balance Type:</strong>', 'debit'),
    ('<strong> Period Type:</strong>', 'instant'),
]


class TestDecodeMetadataBlock(unittest.TestCase):

    def test_labelled_details(self):
        soup = page(definition_block('Cash', 'Currency on hand.', LABELLED_CASH))
        metadata = decode_metadata_block(find_metadata_body(soup, 'Cash'))

        self.assertEqual(metadata, ConceptMetadata(
            definition='Currency on hand.',
            data_type='xbrli:monetaryItemType',
            balance_type='debit',
            period_type='instant',
        ))

    def test_missing_balance_type_row(self):
        rows = [row for row in LABELLED_CASH if 'Balance' not in row[0]]
        rows[-1] = ('Period Type:', 'duration')
        soup = page(definition_block('EarningsPerShareBasic', 'Per share.', rows))
        metadata = decode_metadata_block(find_metadata_body(soup, 'EarningsPerShareBasic'))

        self.assertEqual(metadata.balance_type, '')
        self.assertEqual(metadata.data_type, 'xbrli:monetaryItemType')
        self.assertEqual(metadata.period_type, 'duration')

    def test_unlabelled_details_read_by_position(self):
        rows = [('', 'us-gaap_Cash'), ('', 'us-gaap_'), ('', 'xbrli:monetaryItemType'),
                ('', 'credit'), ('', 'instant')]
        soup = page(definition_block('Cash', 'Currency on hand.', rows))
        metadata = decode_metadata_block(find_metadata_body(soup, 'Cash'))

        self.assertEqual(metadata.data_type, 'xbrli:monetaryItemType')
        self.assertEqual(metadata.balance_type, 'credit')
        self.assertEqual(metadata.period_type, 'instant')

    def test_block_without_details(self):
        soup = page(definition_block('Cash', 'Currency on hand.', [], with_details=False))
        self.assertIsNone(decode_metadata_block(find_metadata_body(soup, 'Cash')))

    def test_missing_block(self):
        self.assertIsNone(find_metadata_body(page(), 'Cash'))


class TestConceptMetadataResolver(unittest.TestCase):

    def test_fixture_concepts(self):
        soup = BeautifulSoup((TESTDATA / 'R2.htm').read_text(encoding='utf-8'), 'html.parser')
        metadata, issues = ConceptMetadataResolver().resolve(
            soup, ['defref_us-gaap_Assets', 'defref_us-gaap_LiabilitiesCurrent']
        )

        self.assertEqual(issues, [])
        self.assertEqual(metadata['defref_us-gaap_Assets'].balance_type, 'debit')
        self.assertEqual(metadata['defref_us-gaap_LiabilitiesCurrent'].balance_type, 'credit')
        self.assertEqual(metadata['defref_us-gaap_Assets'].period_type, 'instant')
        self.assertEqual(
            metadata['defref_us-gaap_Assets'].definition,
            'Amount of asset recognized for present right to economic benefit.',
        )

    def test_unresolved_tag_gets_empty_metadata(self):
        soup = page(definition_block('Cash', 'Currency on hand.', LABELLED_CASH))
        metadata, issues = ConceptMetadataResolver().resolve(
            soup, ['Cash', 'Goodwill'], StatementKind.BALANCE_SHEET
        )

        self.assertEqual(metadata['Goodwill'], ConceptMetadata())
        self.assertEqual(metadata['Cash'].balance_type, 'debit')
        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].kind, IssueKind.CONCEPT_NOT_FOUND)
        self.assertEqual(issues[0].identifier, 'Goodwill')
        self.assertEqual(issues[0].statement, StatementKind.BALANCE_SHEET)

    def test_repeated_tags_resolved_once(self):
        metadata, issues = ConceptMetadataResolver().resolve(page(), ['Cash', 'Cash', 'Cash'])

        self.assertEqual(list(metadata), ['Cash'])
        self.assertEqual(len(issues), 1)


if __name__ == '__main__':
    unittest.main(verbosity=2)
