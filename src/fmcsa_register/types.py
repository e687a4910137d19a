"""
Discovery helper for the register category catalog.

Provides a user-facing API to list the register categories in catalog
order.
"""

from typing import Dict, List
from fmcsa_register.config import get_category_config


class Categories:
    """
    Helper class for discovering register categories.

    All methods use the centralized catalog from categories.yaml and
    return copies to prevent accidental mutations.

    Example:
        >>> Categories.list_available()
        {'NC': 'NAME CHANGE', 'CPL': 'CERTIFICATE, PERMIT, LICENSE', ...}

        >>> Categories.get_label('REV')
        'REVOCATION'

        >>> Categories.is_valid('XYZ')
        False
    """

    @staticmethod
    def list_available() -> Dict[str, str]:
        """
        List all category codes with their labels, in catalog order.

        Returns:
            Dictionary mapping anchor codes to labels
        """
        return {d.code: d.label for d in get_category_config().descriptors()}

    @staticmethod
    def codes() -> List[str]:
        """Category codes in catalog order."""
        return [d.code for d in get_category_config().descriptors()]

    @staticmethod
    def labels() -> List[str]:
        """Category labels in catalog order."""
        return [d.label for d in get_category_config().descriptors()]

    @staticmethod
    def get_label(code: str) -> str:
        """
        Get the label for a category code.

        Raises:
            ValueError: If code is not found
        """
        try:
            return get_category_config().get_label(code)
        except KeyError as e:
            raise ValueError(f"Unknown category code: {code}") from e

    @staticmethod
    def is_valid(code: str) -> bool:
        """Check if a category code is in the catalog."""
        return get_category_config().is_valid_code(code)
