"""
Unit tests for cross-category deduplication.
"""

from fmcsa_register.models import Entry
from fmcsa_register.parsers.deduplicator import deduplicate_entries


def _e(number, title, category, decided='N/A'):
    return Entry(number=number, title=title, decided=decided, category=category)


class TestDeduplicateEntries:
    """Test suite for deduplicate_entries()."""

    def test_first_occurrence_wins(self):
        first = _e('MC-1', 'ACME', 'DISMISSAL', decided='N/A')
        later = _e('MC-1', 'ACME', 'REVOCATION', decided='01/02/2024')

        result = deduplicate_entries([first, later])

        assert result == [first]

    def test_order_of_survivors_preserved(self):
        entries = [
            _e('MC-3', 'C', 'NAME CHANGE'),
            _e('MC-1', 'A', 'NAME CHANGE'),
            _e('MC-3', 'C', 'REVOCATION'),
            _e('MC-2', 'B', 'REVOCATION'),
        ]

        result = deduplicate_entries(entries)

        assert [e.number for e in result] == ['MC-3', 'MC-1', 'MC-2']

    def test_same_number_different_title_kept(self):
        entries = [_e('MC-1', 'ACME', 'NAME CHANGE'), _e('MC-1', 'ACME II', 'NAME CHANGE')]

        assert len(deduplicate_entries(entries)) == 2

    def test_empty_input(self):
        assert deduplicate_entries([]) == []

    def test_accepts_generator(self):
        result = deduplicate_entries(_e(f'MC-{i % 2}', 'X', 'DISMISSAL') for i in range(4))

        assert len(result) == 2

    def test_idempotent(self):
        entries = [_e('MC-1', 'A', 'NAME CHANGE'), _e('MC-1', 'A', 'DISMISSAL')]

        once = deduplicate_entries(entries)

        assert deduplicate_entries(once) == once
