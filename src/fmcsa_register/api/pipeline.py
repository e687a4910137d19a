"""
High-level pipeline for FMCSA register data.

RegisterPipeline coordinates the complete workflow:
- Fetch the register page (via RegisterFetcher)
- Extract entries (via RegisterExtractor)
- Store entries in MongoDB (via StorageService, optional)

Design Philosophy:
- Explicit database control (StorageService injected by user)
- Resilient range processing (continues after individual date failures)
- Statistics-based monitoring (returns actionable metrics)
"""

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Union
import logging

import pandas as pd

from fmcsa_register.api.extraction import RegisterExtractor
from fmcsa_register.config import get_category_catalog
from fmcsa_register.dates import decode_request_date, encode_request_date, today_request_date
from fmcsa_register.errors import RegisterError
from fmcsa_register.models.requests import RegisterRequest
from fmcsa_register.models.result import ExtractionResult
from fmcsa_register.services.register_fetcher import RegisterFetcher
from fmcsa_register.services.storage_service import StorageService

logger = logging.getLogger(__name__)


DateLike = Union[str, date]


class RegisterPipeline:
    """
    Orchestrator for the fetch → extract → store workflow.

    Example:
        # Without storage: fetch and extract only
        pipeline = RegisterPipeline()
        result = pipeline.run('05-JAN-24')

        # With storage
        storage = StorageService()  # User controls DB connection
        pipeline = RegisterPipeline(storage_service=storage)
        stats = pipeline.run_range('01-JAN-24', '31-JAN-24')
        print(f"{stats['entries']} entries from {stats['dates']} dates, "
              f"{stats['failed']} failures")
    """

    def __init__(
        self,
        fetcher: Optional[RegisterFetcher] = None,
        storage_service: Optional[StorageService] = None,
        extractor: Optional[RegisterExtractor] = None
    ):
        """
        Initialize pipeline.

        Args:
            fetcher: RegisterFetcher (default: new fetcher from config)
            storage_service: Pre-initialized StorageService; None disables storage
            extractor: RegisterExtractor (default: full category catalog)
        """
        self._fetcher = fetcher or RegisterFetcher()
        self._storage = storage_service
        self._extractor = extractor or RegisterExtractor()
        logger.info(
            f"RegisterPipeline initialized "
            f"({'with' if storage_service else 'without'} storage)"
        )

    def run(
        self,
        date_token: Optional[DateLike] = None,
        categories: Optional[List[str]] = None
    ) -> ExtractionResult:
        """
        Fetch, extract and (if storage is configured) store one register date.

        Args:
            date_token: DD-MMM-YY token or date (default: today)
            categories: Optional subset of category codes

        Returns:
            ExtractionResult whose date echoes the request date as given

        Raises:
            ValidationError: If the date or category codes are invalid
            FetchError: If the page could not be retrieved
            UnexpectedDocumentError: If the page is not a register page
            DocumentParseError: If the page has no parseable markup
        """
        if isinstance(date_token, date):
            date_token = encode_request_date(date_token)

        request = RegisterRequest(date=date_token, categories=categories)
        register_date = request.date or today_request_date()

        extractor = self._extractor_for(request.categories)

        document = self._fetcher.fetch(register_date)
        result = extractor.extract(document, request_date=register_date)

        if self._storage is not None:
            # Stored documents are keyed by the uppercase token
            storage_date = encode_request_date(decode_request_date(register_date))
            stored = self._storage.upsert_entries(list(result.entries), date_fetched=storage_date)
            if stored['success']:
                logger.info(
                    f"Stored {register_date}: upserted={stored['upserted_count']}, "
                    f"modified={stored['modified_count']}"
                )
            else:
                logger.error(f"Storage failed for {register_date}: {stored.get('error')}")

        return result

    def run_range(
        self,
        start: DateLike,
        end: DateLike,
        skip_existing: bool = True,
        base_dir: str = "data"
    ) -> Dict[str, int]:
        """
        Process every calendar day from start to end (inclusive).

        Args:
            start: First date (DD-MMM-YY token or date)
            end: Last date (DD-MMM-YY token or date)
            skip_existing: Skip dates that already have stored entries
                (only when storage is configured)
            base_dir: Directory for the failures CSV

        Returns:
            Statistics dictionary:
            {
                'dates': 20,     # Dates successfully processed
                'entries': 812,  # Total entries extracted
                'failed': 1,     # Dates that failed
                'skipped': 10    # Dates skipped (already stored)
            }

        Raises:
            ValueError: If start is after end
        """
        start_day = self._normalize_date(start)
        end_day = self._normalize_date(end)
        if start_day > end_day:
            raise ValueError(
                f"start ({encode_request_date(start_day)}) is after "
                f"end ({encode_request_date(end_day)})"
            )

        stats = self._init_statistics()
        failures: List[Dict] = []

        day = start_day
        while day <= end_day:
            token = encode_request_date(day)
            day += timedelta(days=1)

            if skip_existing and self._storage is not None and self._storage.has_date(token):
                logger.info(f"Skipping {token} - already stored")
                stats['skipped'] += 1
                continue

            try:
                result = self.run(token)
            except RegisterError as e:
                logger.error(f"Failed to process {token}: {e}")
                stats['failed'] += 1
                failures.append({
                    'date': token,
                    'error_type': type(e).__name__,
                    'error': str(e)
                })
                continue

            stats['dates'] += 1
            stats['entries'] += result.count

        logger.info(
            f"Range {encode_request_date(start_day)}..{encode_request_date(end_day)} complete: "
            f"{stats['dates']} dates, {stats['entries']} entries, "
            f"{stats['failed']} failed, {stats['skipped']} skipped"
        )

        self._save_failures_csv(failures, start_day, end_day, base_dir)

        return stats

    def close(self) -> None:
        """Close the fetcher session (storage is owned by the caller)."""
        self._fetcher.close()

    def _extractor_for(self, categories: Optional[List[str]]) -> RegisterExtractor:
        """Extractor restricted to a category subset, keeping catalog order."""
        if not categories:
            return self._extractor

        wanted = set(categories)
        subset = [d for d in get_category_catalog() if d.code in wanted]
        return RegisterExtractor(
            catalog=subset,
            strategy=self._extractor.strategy,
            marker=self._extractor.marker
        )

    def _normalize_date(self, value: DateLike) -> date:
        """
        Normalize a date argument to a calendar date.

        Example:
            '05-JAN-24' → date(2024, 1, 5)
            date(2024, 1, 5) → date(2024, 1, 5)
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return decode_request_date(value)

    def _init_statistics(self) -> Dict[str, int]:
        """
        Initialize statistics dictionary.

        Returns:
            Statistics dict with counters set to zero
        """
        return {
            'dates': 0,
            'entries': 0,
            'failed': 0,
            'skipped': 0
        }

    def _save_failures_csv(self, failures: List[Dict], start: date, end: date, base_dir: str):
        """
        Save failed dates to a CSV file.

        Args:
            failures: List of failure dictionaries with date and error
            start: First date of the range
            end: Last date of the range
            base_dir: Base directory for saving CSV files
        """
        if not failures:
            return

        try:
            failures_dir = Path(base_dir) / "failures"
            failures_dir.mkdir(parents=True, exist_ok=True)

            df = pd.DataFrame(failures)

            csv_path = failures_dir / f"failures_{start:%Y%m%d}_{end:%Y%m%d}.csv"
            df.to_csv(csv_path, index=False, encoding='utf-8')

            logger.info(f"Saved {len(failures)} failure(s) to {csv_path}")
        except OSError as e:
            logger.error(f"Failed to save failures CSV: {e}", exc_info=True)
