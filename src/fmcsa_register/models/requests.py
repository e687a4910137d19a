"""
Request models for API and service layer operations.

These Pydantic models provide type-safe, validated interfaces for
register extraction requests.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from fmcsa_register.validators import (
    validate_request_date,
    validate_category_codes
)


class RegisterRequest(BaseModel):
    """
    Request model for extracting one register date.

    Attributes:
        date: Register date in DD-MMM-YY format (None → today)
        categories: Optional subset of category codes to extract
            (None → the whole catalog, in catalog order)

    Example:
        >>> request = RegisterRequest(date='05-JAN-24', categories=['REV'])
        >>> request.date
        '05-JAN-24'

    Raises:
        ValidationError: If any field fails validation
    """

    date: Optional[str] = Field(
        default=None,
        description="Register date in DD-MMM-YY format",
        examples=["05-JAN-24"]
    )

    categories: Optional[List[str]] = Field(
        default=None,
        description="Category codes to extract (default: all)",
        examples=[["NC", "REV"]]
    )

    _validate_date = field_validator('date')(validate_request_date)
    _validate_categories = field_validator('categories')(validate_category_codes)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [{
                "date": "05-JAN-24",
                "categories": ["NC", "REV"]
            }]
        }
    )
