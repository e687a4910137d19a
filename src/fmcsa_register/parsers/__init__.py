"""
HTML parsing modules for the FMCSA register.

- Register rows are not reliably closed: records are rebuilt from
  sibling cells anchored at each row header cell
- Category tables are found from named anchors with pluggable
  location strategies (next sibling, enclosing table's next table)
- Decision dates are matched by shape, not column position
"""

from .html_tree import DocumentTree, LxmlDocumentTree, collapse_whitespace
from .section_locator import (
    SectionLocator,
    SectionLookup,
    SectionHandle,
    TableLocationStrategy,
    NextSiblingTableStrategy,
    EnclosingTableStrategy,
    CascadeTableStrategy,
    create_default_strategy
)
from .date_scanner import find_date, recover_decided_date
from .record_extractor import extract_entry, extract_section_entries, SectionRecords
from .deduplicator import deduplicate_entries

__all__ = [
    # Document tree
    'DocumentTree',
    'LxmlDocumentTree',
    'collapse_whitespace',
    # Section location
    'SectionLocator',
    'SectionLookup',
    'SectionHandle',
    'TableLocationStrategy',
    'NextSiblingTableStrategy',
    'EnclosingTableStrategy',
    'CascadeTableStrategy',
    'create_default_strategy',
    # Records
    'find_date',
    'recover_decided_date',
    'extract_entry',
    'extract_section_entries',
    'SectionRecords',
    'deduplicate_entries',
]
