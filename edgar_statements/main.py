"""
Command-line interface for EDGAR statement extraction.
"""

import argparse
import logging
import sys

from .config import ExtractorConfig
from .data_extractor import run_extraction
from .errors import EdgarStatementsError
from .export import write_results


def setup_logging(verbose: bool = False, log_file: str = "extraction_debug.log"):
    """
    Set up logging configuration.

    Args:
        verbose: If True, enable DEBUG level logging on the console
        log_file: File receiving the full DEBUG log
    """
    logger = logging.getLogger("edgar_statements")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if logger.handlers:
        return logger

    # File handler - always DEBUG
    file_handler = logging.FileHandler(log_file, mode='w')
    file_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(name)s - %(funcName)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(file_formatter)
    file_handler.setLevel(logging.DEBUG)

    # Console handler - INFO or DEBUG based on verbose flag
    console_handler = logging.StreamHandler(sys.stdout)
    console_formatter = logging.Formatter('%(levelname)s: %(message)s')
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='edgar-statements',
        description='Extract balance sheets, income statements and cash-flow statements '
                    'from the XBRL report pages of one EDGAR quarter',
        epilog='Example: edgar-statements --year 2020 --quarter 1 '
               '--user-agent "Sample Co admin@sample.com"'
    )
    parser.add_argument('--year', type=int, required=True, help='Filing year')
    parser.add_argument('--quarter', type=int, required=True, choices=[1, 2, 3, 4],
                        help='Calendar quarter')
    parser.add_argument('--user-agent', help='User-Agent sent to the SEC (name and e-mail)')
    parser.add_argument('--forms', nargs='+', default=['10-K', '10-Q'],
                        help='Form types to process')
    parser.add_argument('--max-filings', type=int, default=None,
                        help='Process at most this many filings')
    parser.add_argument('--requests-per-second', type=float, default=10.0,
                        help='Request rate limit')
    parser.add_argument('--output-dir', default='output', help='Directory for the CSV files')
    parser.add_argument('--log-file', default='extraction_debug.log', help='Debug log file')
    parser.add_argument('--verbose', action='store_true', help='Debug output on the console')
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    config = ExtractorConfig(
        user_agent=args.user_agent,
        requests_per_second=args.requests_per_second,
        forms=tuple(args.forms),
        max_filings=args.max_filings,
        output_dir=args.output_dir,
        verbose=args.verbose,
    )
    logger = setup_logging(verbose=config.verbose, log_file=args.log_file)

    try:
        logger.info(f"Starting extraction for {args.year} QTR{args.quarter} ({', '.join(config.forms)})")
        result = run_extraction(args.year, args.quarter, config)
    except KeyboardInterrupt:
        logger.warning("Process interrupted by user")
        return 130
    except EdgarStatementsError as e:
        logger.critical(f"Extraction failed: {e}", exc_info=True)
        return 1

    if not result.record_count:
        logger.warning("Extraction complete, but no records extracted")
        logger.info(f"Check '{args.log_file}' for detailed information")

    write_results(result, config.output_dir)

    logger.info(f"\n{'='*80}")
    logger.info(f"SUCCESS! Extracted {result.record_count} records from "
                f"{result.filings_processed} filings ({len(result.issues)} issues)")
    logger.info(f"Saved to: '{config.output_dir}'")
    logger.info(f"{'='*80}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
