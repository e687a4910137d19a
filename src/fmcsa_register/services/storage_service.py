"""
MongoDB storage service for FMCSA register entries.

Handles all MongoDB operations for storing and retrieving entries:
- Upsert (idempotent per register date)
- Querying (by register date or date range, optionally by category)
- Deletion
- Index management
"""

from typing import List, Dict, Optional, Any
from datetime import datetime
from pymongo import MongoClient, ASCENDING, ReplaceOne
from pymongo.errors import PyMongoError

from fmcsa_register.config import get_app_config
from fmcsa_register.dates import decode_request_date
from fmcsa_register.models import Entry, StoredEntry


class StorageService:
    """
    MongoDB storage service for register entries.

    Usage:
        >>> service = StorageService()
        >>> result = service.upsert_entries(entries, date_fetched='05-JAN-24')
        >>> stored = service.get_entries('05-JAN-24')
        >>> service.close()

    Context Manager:
        >>> with StorageService() as service:
        ...     service.upsert_entries(entries, date_fetched='05-JAN-24')

    Environment Variables (via config facade):
        - MONGO_HOST: MongoDB host (default: localhost:27017)
        - DB_NAME: Database name (default: FMCSA)
        - COLLECTION_NAME: Collection name (default: register_entries)
    """

    def __init__(
        self,
        mongo_uri: Optional[str] = None,
        database: Optional[str] = None,
        collection: Optional[str] = None
    ):
        """
        Initialize StorageService with MongoDB connection.

        Parameters take precedence over config values.

        Args:
            mongo_uri: MongoDB connection string (overrides config if provided)
            database: Database name (overrides config if provided)
            collection: Collection name (overrides config if provided)

        Raises:
            ConnectionFailure: If MongoDB connection fails
        """
        config = get_app_config()

        self.mongo_uri = mongo_uri or config.mongodb_uri
        self.database_name = database or config.mongodb_database
        self.collection_name = collection or config.mongodb_collection

        self.client = MongoClient(
            self.mongo_uri,
            serverSelectionTimeoutMS=5000  # 5 second timeout
        )

        # Test connection
        self.client.admin.command('ping')

        self.db = self.client[self.database_name]
        self.collection = self.db[self.collection_name]

    def upsert_entries(self, entries: List[Entry], date_fetched: str) -> Dict[str, Any]:
        """
        Insert or update the entries of one register date (idempotent).

        Re-fetching the same date replaces existing documents instead of
        duplicating them.

        Args:
            entries: Extracted entries
            date_fetched: Register date the entries were fetched for (DD-MMM-YY)

        Returns:
            Dictionary with:
                - success (bool): True if operation succeeded
                - upserted_count (int): Number of new documents inserted
                - modified_count (int): Number of existing documents updated
                - error (str): Error message if failed (optional)

        Raises:
            MalformedDateError: If date_fetched is not DD-MMM-YY
        """
        if not entries:
            return {
                'success': True,
                'upserted_count': 0,
                'modified_count': 0
            }

        operations = []
        for entry in entries:
            doc = StoredEntry.from_entry(entry, date_fetched)
            operations.append(
                ReplaceOne(
                    {'document_id': doc.document_id},
                    doc.to_mongo_dict(),
                    upsert=True
                )
            )

        try:
            result = self.collection.bulk_write(operations)

            return {
                'success': True,
                'upserted_count': result.upserted_count,
                'modified_count': result.modified_count
            }

        except PyMongoError as e:
            return {
                'success': False,
                'upserted_count': 0,
                'modified_count': 0,
                'error': f"MongoDB error: {str(e)}"
            }

    def get_entries(
        self,
        date_from: str,
        date_to: Optional[str] = None,
        category: Optional[str] = None
    ) -> List[Entry]:
        """
        Retrieve stored entries for a register date or an inclusive date range.

        Args:
            date_from: First register date (DD-MMM-YY)
            date_to: Last register date (DD-MMM-YY); defaults to date_from
            category: Optional category label filter

        Returns:
            Entries sorted by register date, then by insertion (_id) order

        Raises:
            MalformedDateError: If a date is not DD-MMM-YY
        """
        start = _as_datetime(date_from)
        end = _as_datetime(date_to) if date_to else start

        query: Dict[str, Any] = {'register_date': {'$gte': start, '$lte': end}}
        if category:
            query['category'] = category

        # _id grows with insertion, so ties keep the order entries were stored in
        documents = self.collection.find(query).sort([
            ('register_date', ASCENDING),
            ('_id', ASCENDING)
        ])

        return [StoredEntry.model_validate(doc).to_entry() for doc in documents]

    def has_date(self, date_fetched: str) -> bool:
        """Check whether any entries are stored for a register date."""
        return self.collection.count_documents({'date_fetched': date_fetched}, limit=1) > 0

    def delete_date(self, date_fetched: str) -> Dict[str, Any]:
        """
        Delete all entries of a register date.

        Returns:
            Dictionary with:
                - success (bool): True if deletion succeeded
                - deleted_count (int): Number of documents deleted
        """
        try:
            result = self.collection.delete_many({
                'date_fetched': date_fetched
            })

            return {
                'success': True,
                'deleted_count': result.deleted_count
            }

        except PyMongoError as e:
            return {
                'success': False,
                'deleted_count': 0,
                'error': f"MongoDB error: {str(e)}"
            }

    def create_indexes(self) -> None:
        """
        Create recommended MongoDB indexes for query performance.

        Creates indexes on:
        - (document_id) - unique, for upserts
        - (register_date, category) - for date-range queries
        - (date_fetched) - for per-date checks and deletion
        - (number) - for docket lookups across dates
        """
        self.collection.create_index(
            [('document_id', ASCENDING)],
            unique=True,
            name='idx_document_id'
        )

        self.collection.create_index(
            [('register_date', ASCENDING), ('category', ASCENDING)],
            name='idx_register_date_category'
        )

        self.collection.create_index(
            [('date_fetched', ASCENDING)],
            name='idx_date_fetched'
        )

        self.collection.create_index(
            [('number', ASCENDING)],
            name='idx_number'
        )

    def close(self) -> None:
        """
        Close MongoDB connection.

        Automatically called when using context manager.
        """
        if self.client:
            self.client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - closes connection."""
        self.close()
        return False  # Don't suppress exceptions


def _as_datetime(date_token: str) -> datetime:
    day = decode_request_date(date_token)
    return datetime(day.year, day.month, day.day)
