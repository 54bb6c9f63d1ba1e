import datetime
import unittest
from pathlib import Path

from edgar_statements import FilingContext, FilingRef, parse_index_listing

TESTDATA = Path(__file__).parent / 'testdata'


class TestParseIndexListing(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.listing = (TESTDATA / 'xbrl.idx').read_text(encoding='utf-8')

    def test_form_filter(self):
        filings = parse_index_listing(self.listing, ['10-K', '10-Q'])
        self.assertEqual([filing.cik for filing in filings], ['1000045', '1000180', '1000228'])

    def test_form_filter_ignores_case(self):
        filings = parse_index_listing(self.listing, ['10-q'])
        self.assertEqual([filing.company_name for filing in filings], ['NICHOLAS FINANCIAL INC'])

    def test_all_well_formed_lines_without_filter(self):
        filings = parse_index_listing(self.listing)
        self.assertEqual(len(filings), 5)
        self.assertEqual(filings[1].form_type, 'SC 13G/A')

    def test_fields(self):
        filing = parse_index_listing(self.listing, ['10-Q'])[0]
        self.assertEqual(filing.form_type, '10-Q')
        self.assertEqual(filing.date_filed, datetime.date(2020, 2, 14))
        self.assertEqual(filing.file_name, 'edgar/data/1000045/0001564590-20-004703.txt')

    def test_unparseable_date(self):
        filing = parse_index_listing(self.listing, ['10-K'])[-1]
        self.assertEqual(filing.company_name, 'HENRY SCHEIN INC')
        self.assertIsNone(filing.date_filed)

    def test_listing_without_separator(self):
        filings = parse_index_listing(
            '1000180|SANDISK CORP|10-K|2020-02-27|edgar/data/1000180/0001000180-20-000012.txt\n'
        )
        self.assertEqual(len(filings), 1)


class TestFilingRef(unittest.TestCase):

    def setUp(self):
        self.filing = FilingRef(
            cik='1000045',
            company_name='NICHOLAS FINANCIAL INC',
            form_type='10-Q',
            date_filed=datetime.date(2020, 2, 14),
            file_name='edgar/data/1000045/0001564590-20-004703.txt',
        )

    def test_accession_number(self):
        self.assertEqual(self.filing.accession_number, '000156459020004703')

    def test_directory_url(self):
        self.assertEqual(
            self.filing.directory_url,
            'https://www.sec.gov/Archives/edgar/data/1000045/000156459020004703',
        )

    def test_context(self):
        self.assertEqual(
            self.filing.context(2020, 1),
            FilingContext(year=2020, quarter=1, cik='1000045', accession_number='000156459020004703'),
        )


if __name__ == '__main__':
    unittest.main(verbosity=2)
