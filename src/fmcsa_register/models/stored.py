"""
Pydantic model for register entries persisted in MongoDB.

Schema Design:
- One document per entry per register date
- Entry fields stored flat alongside the request date token
- Composite document_id keeps upserts idempotent
"""

import hashlib
from datetime import datetime

from pydantic import BaseModel, Field

from fmcsa_register.dates import decode_request_date
from fmcsa_register.models.entry import Entry


class StoredEntry(BaseModel):
    """
    MongoDB document schema for a register entry.

    ``register_date`` is the calendar form of ``date_fetched`` so that
    date-range queries compare dates rather than DD-MMM-YY strings.

    Example:
        >>> doc = StoredEntry.from_entry(entry, date_fetched='05-JAN-24')
        >>> doc.document_id.startswith('05-JAN-24_MC-98765_')
        True
        >>> doc.register_date
        datetime.datetime(2024, 1, 5, 0, 0)
    """

    # === Composite Key ===
    document_id: str = Field(
        ...,
        description="Unique identifier: {date_fetched}_{number}_{title hash}"
    )

    # === Entry ===
    number: str = Field(..., min_length=1, description="Docket / identifier")
    title: str = Field(..., min_length=1, description="Entry title")
    decided: str = Field(..., description="Decision date token or 'N/A'")
    category: str = Field(..., description="Category label")

    # === Register Date ===
    date_fetched: str = Field(
        ...,
        pattern=r'^\d{2}-[A-Z]{3}-\d{2}$',
        description="Register date the entry was fetched for (DD-MMM-YY)",
        examples=["05-JAN-24"]
    )

    register_date: datetime = Field(
        ...,
        description="date_fetched as a calendar date (midnight)"
    )

    # === Storage Metadata ===
    fetched_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp when the entry was stored"
    )

    @classmethod
    def from_entry(cls, entry: Entry, date_fetched: str) -> 'StoredEntry':
        """
        Build a storage document from an extracted entry.

        Raises:
            MalformedDateError: If date_fetched is not DD-MMM-YY
        """
        day = decode_request_date(date_fetched)
        return cls(
            document_id=create_document_id(date_fetched, entry.number, entry.title),
            date_fetched=date_fetched,
            register_date=datetime(day.year, day.month, day.day),
            **entry.to_dict()
        )

    def to_entry(self) -> Entry:
        """Drop storage metadata and return the plain entry."""
        return Entry(
            number=self.number,
            title=self.title,
            decided=self.decided,
            category=self.category
        )

    def to_mongo_dict(self) -> dict:
        """
        Convert to dictionary suitable for MongoDB insertion.

        Returns:
            Dictionary with datetime fields left for MongoDB to encode
        """
        return self.model_dump()


def create_document_id(date_fetched: str, number: str, title: str) -> str:
    """
    Create composite document ID.

    The title is hashed because one docket number can appear with
    different titles on the same register date.

    Example:
        >>> create_document_id('05-JAN-24', 'MC-1', 'ACME')[:15]
        '05-JAN-24_MC-1_'
    """
    title_hash = hashlib.sha1(title.encode('utf-8')).hexdigest()[:12]
    return f"{date_fetched}_{number}_{title_hash}"
