"""
Pydantic model for a single register decision record.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


NOT_AVAILABLE = "N/A"


class Entry(BaseModel):
    """
    One decision record reconstructed from the register.

    ``number`` and ``title`` are stripped and must be non-empty, so a
    partially-filled record can never be constructed. ``decided`` holds
    the recovered date token or ``"N/A"``.

    Example:
        >>> Entry(
        ...     number="MC-98765",
        ...     title="ACME TRUCKING LLC",
        ...     decided="03/10/2024",
        ...     category="REVOCATION"
        ... ).number
        'MC-98765'
    """

    number: str = Field(
        ...,
        description="Docket / identifier from the row header cell",
        examples=["MC-98765"]
    )

    title: str = Field(
        ...,
        description="Free-text title from the first data cell",
        examples=["ACME TRUCKING LLC"]
    )

    decided: str = Field(
        default=NOT_AVAILABLE,
        description="Decision date token, or 'N/A' when none was found",
        examples=["03/10/2024"]
    )

    category: str = Field(
        ...,
        min_length=1,
        description="Category label the record was found under",
        examples=["REVOCATION"]
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('number', 'title')
    @classmethod
    def require_text(cls, v: str) -> str:
        """Strip and reject empty identifying fields."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @property
    def identity(self) -> tuple:
        """Deduplication key: (number, title)."""
        return (self.number, self.title)

    def to_dict(self) -> dict:
        """Boundary representation: {number, title, decided, category}."""
        return {
            'number': self.number,
            'title': self.title,
            'decided': self.decided,
            'category': self.category,
        }
