"""
Cross-category deduplication of register entries.
"""

from typing import Iterable, List
import logging

from fmcsa_register.models.entry import Entry

logger = logging.getLogger(__name__)


def deduplicate_entries(entries: Iterable[Entry]) -> List[Entry]:
    """
    Remove later entries sharing (number, title) with an earlier one.

    Category and decided date are not part of the identity. The first
    occurrence is kept and survivors keep their relative order.

    Example:
        >>> a = Entry(number='MC-1', title='ACME', decided='N/A', category='DISMISSAL')
        >>> b = Entry(number='MC-1', title='ACME', decided='01/02/2024', category='REVOCATION')
        >>> [e.category for e in deduplicate_entries([a, b])]
        ['DISMISSAL']
    """
    seen = set()
    unique = []
    removed = 0

    for entry in entries:
        if entry.identity in seen:
            removed += 1
            continue
        seen.add(entry.identity)
        unique.append(entry)

    if removed:
        logger.debug(f"Removed {removed} duplicate entries")

    return unique
