"""
SEC EDGAR client for fetching index listings, filing summaries and report pages.
"""

import logging
import time
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from .config import FILING_SUMMARY_NAME, FULL_INDEX_URL, HEADERS, ExtractorConfig
from .errors import SECClientError
from .models import ReportCatalogEntry
from .statement_finder import parse_filing_summary

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


class RateLimiter:
    """Keeps consecutive requests at least `min_interval` seconds apart."""

    def __init__(self, min_interval: float):
        self.min_interval = float(min_interval)
        self._last = 0.0

    def wait(self) -> None:
        elapsed = time.monotonic() - self._last
        if elapsed < self.min_interval:
            time.sleep(self.min_interval - elapsed)
        self._last = time.monotonic()


class SECClient:
    """Client for the EDGAR archives."""

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize SEC client.

        Args:
            config: Extraction configuration (user agent, rate limit, retries)
            session: Optional pre-built session
        """
        self.config = config or ExtractorConfig()
        self.session = session or requests.Session()

        headers = {'User-Agent': self.config.user_agent} if self.config.user_agent else dict(HEADERS)
        headers['Accept-Encoding'] = 'gzip, deflate'
        headers['Host'] = 'www.sec.gov'
        self.session.headers.update(headers)

        self.rate_limiter = RateLimiter(self.config.min_interval)

    def _get(self, url: str) -> requests.Response:
        """GET with rate limiting and exponential backoff on throttling/server errors."""
        backoff = 1.0
        attempts = self.config.max_retries + 1

        for attempt in range(1, attempts + 1):
            self.rate_limiter.wait()
            try:
                response = self.session.get(url, timeout=self.config.timeout)
            except requests.exceptions.RequestException as e:
                logger.warning(f"Request failed ({attempt}/{attempts}) for {url}: {e}")
                if attempt == attempts:
                    raise SECClientError(f"Failed to fetch {url}") from e
            else:
                if response.status_code not in RETRY_STATUS_CODES:
                    try:
                        response.raise_for_status()
                    except requests.exceptions.HTTPError as e:
                        raise SECClientError(f"HTTP {response.status_code} for {url}") from e
                    return response

                logger.warning(f"HTTP {response.status_code} ({attempt}/{attempts}) for {url}")
                if attempt == attempts:
                    raise SECClientError(f"HTTP {response.status_code} for {url}")

            time.sleep(backoff)
            backoff = min(backoff * 2, 16.0)

        raise SECClientError(f"Failed to fetch {url}")

    def get_index_listing(self, year: int, quarter: int) -> str:
        """
        Download the quarterly XBRL filing listing.

        Args:
            year: Filing year (e.g. 2020)
            quarter: Calendar quarter 1-4

        Returns:
            Contents of xbrl.idx
        """
        if not 1 <= quarter <= 4:
            raise ValueError(f"Quarter must be 1-4, got {quarter}")

        url = f"{FULL_INDEX_URL}{year}/QTR{quarter}/xbrl.idx"
        logger.info(f"Fetching index listing {url}")
        return self._get(url).text

    def get_filing_summary(self, directory_url: str) -> List[ReportCatalogEntry]:
        """Download and decode FilingSummary.xml of a filing directory."""
        url = f"{directory_url.rstrip('/')}/{FILING_SUMMARY_NAME}"
        logger.debug(f"Fetching filing summary {url}")
        return parse_filing_summary(self._get(url).content)

    def get_report(self, url: str) -> BeautifulSoup:
        """Download and parse one report page."""
        logger.debug(f"Fetching report {url}")
        return BeautifulSoup(self._get(url).content, 'html.parser')
