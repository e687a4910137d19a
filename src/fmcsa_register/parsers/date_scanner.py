"""
Decision date recovery.

The column holding the decision date shifts between register variants,
and the cell right after the title is sometimes empty. Dates are matched
by shape rather than position.
"""

import re
from typing import Optional, Sequence

from fmcsa_register.models.entry import NOT_AVAILABLE


DATE_PATTERN = re.compile(r'(?<!\d)\d{2}/\d{2}/\d{4}(?!\d)')


def find_date(text: str) -> Optional[str]:
    """
    Return the first ``NN/NN/NNNN`` token in text, or None.

    Example:
        >>> find_date('Decided 03/10/2024')
        '03/10/2024'
    """
    match = DATE_PATTERN.search(text or '')
    return match.group(0) if match else None


def recover_decided_date(cells: Sequence[str]) -> str:
    """
    Pick the decision date from the texts of the cells following a row header.

    ``cells[0]`` is the title cell and is never scanned. The cell right
    after it is checked first, then every remaining cell in order.

    Args:
        cells: Sibling cell texts, title cell included

    Returns:
        The first date token found, or 'N/A'

    Example:
        >>> recover_decided_date(['Some Carrier Co', '', '01/15/2024'])
        '01/15/2024'
        >>> recover_decided_date(['Some Carrier Co'])
        'N/A'
    """
    if len(cells) > 1:
        expected = find_date(cells[1])
        if expected:
            return expected

    for text in cells[2:]:
        found = find_date(text)
        if found:
            return found

    return NOT_AVAILABLE
