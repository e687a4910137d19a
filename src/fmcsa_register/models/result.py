"""
Extraction result model and its boundary serialization.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fmcsa_register.models.entry import Entry


class ExtractionResult(BaseModel):
    """
    Outcome of one orchestration call.

    ``count`` always equals ``len(entries)``; ``source_date`` echoes the
    request date verbatim.

    Example:
        >>> result = ExtractionResult.build(entries=[], source_date='05-JAN-24')
        >>> result.to_response()
        {'success': True, 'count': 0, 'date': '05-JAN-24', 'entries': []}
    """

    entries: Tuple[Entry, ...] = Field(
        default_factory=tuple,
        description="Deduplicated entries in catalog-then-document order"
    )

    count: int = Field(
        default=0,
        ge=0,
        description="Number of entries"
    )

    source_date: Optional[str] = Field(
        default=None,
        description="Request date the document was fetched for",
        examples=["05-JAN-24"]
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def check_count(self) -> 'ExtractionResult':
        """count must match the number of entries."""
        if self.count != len(self.entries):
            raise ValueError(
                f"count ({self.count}) does not match number of entries ({len(self.entries)})"
            )
        return self

    @classmethod
    def build(cls, entries, source_date: Optional[str] = None) -> 'ExtractionResult':
        """Create a result, deriving count from entries."""
        entries = tuple(entries)
        return cls(entries=entries, count=len(entries), source_date=source_date)

    def to_response(self) -> dict:
        """
        Serialize to the success boundary shape.

        Returns:
            {'success': True, 'count': N, 'date': ..., 'entries': [...]}
        """
        return {
            'success': True,
            'count': self.count,
            'date': self.source_date,
            'entries': [entry.to_dict() for entry in self.entries],
        }
