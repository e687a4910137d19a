"""
Reusable field validators for Pydantic models.

These validators work with the category catalog and the register date
format, and can be used with the Pydantic @field_validator decorator for
automatic input validation.
"""

from typing import List, Optional

from fmcsa_register.dates import decode_request_date
from fmcsa_register.errors import MalformedDateError


def validate_request_date(token: Optional[str]) -> Optional[str]:
    """
    Validate a register request date in ``DD-MMM-YY`` format.

    The token is returned exactly as given (month case included) so it can
    be echoed back to the caller; ``None`` passes through (callers default
    it to today's date).

    Args:
        token: Request date token (e.g. '05-JAN-24')

    Returns:
        The token, unchanged

    Raises:
        ValueError: If the token is malformed or names an impossible date

    Example:
        >>> validate_request_date('05-jan-24')
        '05-jan-24'
        >>> validate_request_date('2024-01-05')  # Raises ValueError
    """
    if token is None:
        return None

    try:
        decode_request_date(token)
    except MalformedDateError as e:
        raise ValueError(
            f"Date must be DD-MMM-YY format, got: '{token}'\n"
            f"Example: '05-JAN-24'"
        ) from e

    return token


def validate_category_codes(codes: Optional[List[str]]) -> Optional[List[str]]:
    """
    Validate category anchor codes against the category catalog.

    Args:
        codes: Category codes to validate (e.g. ['NC', 'REV']), or None
            for "all categories"

    Returns:
        The validated list of codes (unchanged if all valid)

    Raises:
        ValueError: If any code is not in the catalog, listing the invalid
            codes and the valid ones

    Example:
        >>> validate_category_codes(['NC', 'REV'])
        ['NC', 'REV']
        >>> validate_category_codes(['XYZ'])  # Raises ValueError
    """
    if not codes:
        return codes

    from fmcsa_register.config import get_category_config
    config = get_category_config()

    invalid = [c for c in codes if not config.is_valid_code(c)]
    if invalid:
        valid_codes = [d.code for d in config.descriptors()]
        raise ValueError(
            f"Invalid category codes: {invalid}\n"
            f"Valid codes: {valid_codes}"
        )

    return codes
