"""
Register Fetch Service

Retrieves the FMCSA register detail page for one date:
- Form-encoded POST keyed by pd_date (DD-MMM-YY)
- Browser-like headers (the endpoint rejects bare clients)
- Bounded timeout, no retries
- Transport and HTTP errors surface as FetchError
"""

from typing import Dict, Optional
import logging

import requests

from fmcsa_register.config import AppConfig, get_app_config
from fmcsa_register.errors import FetchError
from fmcsa_register.models.document import RawDocument

logger = logging.getLogger(__name__)


class RegisterFetcher:
    """
    Service for fetching FMCSA register pages.

    Usage:
        with RegisterFetcher() as fetcher:
            document = fetcher.fetch('05-JAN-24')
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        config: Optional[AppConfig] = None
    ):
        """
        Initialize fetcher.

        Args:
            session: requests.Session to reuse (default: a new session)
            config: AppConfig override (default: get_app_config())
        """
        self.config = config or get_app_config()
        self.session = session or requests.Session()

    def build_payload(self, date_token: str) -> Dict[str, str]:
        """Form fields for the register detail request."""
        return {
            'pd_date': date_token,
            'pv_vpath': 'LIVIEW',
        }

    def build_headers(self) -> Dict[str, str]:
        """Request headers for the register detail request."""
        return {
            'User-Agent': self.config.user_agent,
            'Referer': self.config.referer_url,
            'Content-Type': 'application/x-www-form-urlencoded',
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.9',
            'Origin': 'https://li-public.fmcsa.dot.gov',
        }

    def fetch(self, date_token: str) -> RawDocument:
        """
        Fetch the register page for one date.

        Args:
            date_token: Register date in DD-MMM-YY format

        Returns:
            RawDocument with the page HTML and the request date

        Raises:
            FetchError: On connection errors, timeouts or non-2xx responses
        """
        logger.info(f"Fetching register data for date: {date_token}")

        try:
            response = self.session.post(
                self.config.register_url,
                data=self.build_payload(date_token),
                headers=self.build_headers(),
                timeout=self.config.request_timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Register fetch failed for {date_token}: {e}", exc_info=True)
            raise FetchError(f"Failed to fetch FMCSA register for {date_token}: {e}") from e

        logger.debug(f"Fetched {len(response.text):,} chars for {date_token}")

        return RawDocument(
            html=response.text,
            request_date=date_token,
            marker=self.config.document_marker
        )

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - closes session."""
        self.close()
        return False
