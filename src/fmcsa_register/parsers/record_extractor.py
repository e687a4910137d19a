"""
Record reconstruction from a category's data table.

The register does not close its rows reliably, so records are not read
row by row. Every row header cell (``<th scope="row">``) anchors one
record, and the record's data cells are the ``<td>`` siblings that follow
it, up to the next row header.
"""

from dataclasses import dataclass, field
from typing import List
import logging

from fmcsa_register.errors import MalformedRecordError
from fmcsa_register.models.entry import Entry
from fmcsa_register.parsers.date_scanner import recover_decided_date
from fmcsa_register.parsers.html_tree import DocumentTree, Node
from fmcsa_register.parsers.section_locator import SectionHandle

logger = logging.getLogger(__name__)


@dataclass
class SectionRecords:
    """Entries built from one section plus the number of dropped header cells."""
    entries: List[Entry] = field(default_factory=list)
    dropped: int = 0

    @property
    def header_count(self) -> int:
        return len(self.entries) + self.dropped


def find_row_headers(tree: DocumentTree, table: Node) -> List[Node]:
    """All ``th[scope=row]`` cells inside the table, in document order."""
    return tree.find_by_attribute('th', 'scope', 'row', scope=table)


def collect_data_cells(tree: DocumentTree, header: Node) -> List[str]:
    """
    Texts of the ``td`` siblings following a row header cell.

    The walk stops at the next row header so a record never absorbs the
    cells of the one after it.
    """
    def is_row_header(node: Node) -> bool:
        return tree.matches(node, 'th', 'scope', 'row')

    return [
        tree.text_of(cell)
        for cell in tree.following_siblings(header, tag='td', stop=is_row_header)
    ]


def extract_entry(tree: DocumentTree, header: Node, category: str) -> Entry:
    """
    Build one Entry from a row header cell.

    Args:
        tree: Parsed document
        header: The ``th[scope=row]`` element
        category: Label assigned to the record

    Returns:
        Entry with number, title, decided and category

    Raises:
        MalformedRecordError: If the number is empty, there is no data cell,
            or the title is empty
    """
    number = tree.text_of(header, collapse=False)
    if not number:
        raise MalformedRecordError("Row header cell is empty")

    cells = collect_data_cells(tree, header)
    if not cells:
        raise MalformedRecordError(f"No data cells follow row header {number}")

    title = cells[0]
    if not title:
        raise MalformedRecordError(f"Empty title for {number}")

    return Entry(
        number=number,
        title=title,
        decided=recover_decided_date(cells),
        category=category
    )


def extract_section_entries(tree: DocumentTree, handle: SectionHandle) -> SectionRecords:
    """
    Extract every record of a located category section.

    Malformed header cells are dropped and counted; they never abort the
    section.

    Args:
        tree: Parsed document
        handle: Located section from SectionLocator

    Returns:
        SectionRecords with entries in document order
    """
    label = handle.descriptor.label
    records = SectionRecords()

    for header in find_row_headers(tree, handle.table):
        try:
            records.entries.append(extract_entry(tree, header, label))
        except MalformedRecordError as e:
            records.dropped += 1
            logger.debug(f"Dropped record in {handle.descriptor.code}: {e}")

    logger.info(
        f"Extracted {len(records.entries)} records for category: {label} "
        f"({records.dropped} dropped)"
    )
    return records
