"""
Category catalog entry model.
"""

from pydantic import BaseModel, ConfigDict, Field


class CategoryDescriptor(BaseModel):
    """
    One register category: the anchor name that opens its section and the
    label attached to every record extracted from it.

    Example:
        >>> CategoryDescriptor(code='REV', label='REVOCATION')
        CategoryDescriptor(code='REV', label='REVOCATION')
    """

    code: str = Field(
        ...,
        min_length=1,
        description="Anchor name in the register page (<a name=...>)",
        examples=["NC"]
    )

    label: str = Field(
        ...,
        min_length=1,
        description="Human-readable category name",
        examples=["NAME CHANGE"]
    )

    model_config = ConfigDict(frozen=True)
