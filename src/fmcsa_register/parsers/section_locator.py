"""
Category section location.

Each register category opens with a named anchor (``<a name="REV">``).
The data table belonging to it sits in one of two positions, depending
on the page variant:

1. Immediately after the anchor (anchor and table are siblings)
2. After the table that encloses the anchor (anchor lives in a heading
   table, the data follows in the next table)

Design:
- Strategy Pattern: table-location strategies are interchangeable
- The default cascade tries (1) and falls back to (2)
- A missing anchor or table is an expected outcome, reported as a
  tagged SectionLookup rather than raised
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional
import logging

from fmcsa_register.errors import SectionNotFoundError
from fmcsa_register.models.category import CategoryDescriptor
from fmcsa_register.parsers.html_tree import DocumentTree, Node

logger = logging.getLogger(__name__)

REASON_ANCHOR = 'anchor'
REASON_TABLE = 'table'


@dataclass(frozen=True)
class TableMatch:
    """A located table and the name of the strategy that found it."""
    table: Node
    strategy: str


@dataclass(frozen=True)
class SectionHandle:
    """The data table associated with one category in one document."""
    descriptor: CategoryDescriptor
    anchor: Node
    table: Node
    strategy: str


@dataclass(frozen=True)
class SectionLookup:
    """
    Outcome of locating one category: found with a handle, or missing.

    ``reason`` names what was missing ('anchor' or 'table').
    """
    descriptor: CategoryDescriptor
    handle: Optional[SectionHandle] = None
    reason: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.handle is not None

    @classmethod
    def hit(cls, handle: SectionHandle) -> 'SectionLookup':
        return cls(descriptor=handle.descriptor, handle=handle)

    @classmethod
    def missing(cls, descriptor: CategoryDescriptor, reason: str) -> 'SectionLookup':
        return cls(descriptor=descriptor, reason=reason)

    def require(self) -> SectionHandle:
        """
        Return the handle, raising if the section was not found.

        Raises:
            SectionNotFoundError: If the anchor or table was missing
        """
        if self.handle is None:
            raise SectionNotFoundError(self.descriptor.code, self.reason or REASON_ANCHOR)
        return self.handle


class TableLocationStrategy(ABC):
    """
    Abstract base class for anchor → table association strategies.
    """

    name: str = 'abstract'

    @abstractmethod
    def locate(self, tree: DocumentTree, anchor: Node) -> Optional[TableMatch]:
        """
        Find the data table for an anchor.

        Args:
            tree: Parsed document
            anchor: The category's anchor element

        Returns:
            TableMatch if a table was found, None otherwise
        """
        pass


class NextSiblingTableStrategy(TableLocationStrategy):
    """
    The table that is the anchor's immediately following sibling element.
    """

    name = 'next_sibling'

    def locate(self, tree: DocumentTree, anchor: Node) -> Optional[TableMatch]:
        candidate = tree.next_element(anchor)
        if candidate is not None and tree.matches(candidate, 'table'):
            return TableMatch(table=candidate, strategy=self.name)
        return None


class EnclosingTableStrategy(TableLocationStrategy):
    """
    The first table after the table that encloses the anchor.
    """

    name = 'enclosing_table'

    def locate(self, tree: DocumentTree, anchor: Node) -> Optional[TableMatch]:
        enclosing = tree.enclosing(anchor, 'table')
        if enclosing is None:
            return None

        table = tree.following(enclosing, 'table')
        if table is None:
            return None
        return TableMatch(table=table, strategy=self.name)


class CascadeTableStrategy(TableLocationStrategy):
    """
    Try several strategies in order until one finds a table.

    Args:
        strategies: List of strategies to try in order

    Example:
        >>> strategy = CascadeTableStrategy([
        ...     NextSiblingTableStrategy(),
        ...     EnclosingTableStrategy()
        ... ])
    """

    name = 'cascade'

    def __init__(self, strategies: list):
        if not strategies:
            raise ValueError("Must provide at least one strategy")

        self.strategies = strategies

    def locate(self, tree: DocumentTree, anchor: Node) -> Optional[TableMatch]:
        for strategy in self.strategies:
            match = strategy.locate(tree, anchor)
            if match is not None:
                return match

        return None


def create_default_strategy() -> TableLocationStrategy:
    """
    Create default table-location strategy.

    Strategy: next sibling → enclosing table's next table
    """
    return CascadeTableStrategy([
        NextSiblingTableStrategy(),
        EnclosingTableStrategy()
    ])


class SectionLocator:
    """
    Finds the anchor and data table for each category of a parsed document.

    Only the first anchor with a given name is honored, and at most one
    table is associated with it.

    Usage:
        locator = SectionLocator(tree)
        for lookup in locator.locate_all(catalog):
            if lookup.found:
                ...
    """

    def __init__(self, tree: DocumentTree, strategy: Optional[TableLocationStrategy] = None):
        self.tree = tree
        self.strategy = strategy or create_default_strategy()

    def locate(self, descriptor: CategoryDescriptor) -> SectionLookup:
        """
        Locate one category's section.

        Args:
            descriptor: Category to look for

        Returns:
            SectionLookup (found with handle, or missing with reason)
        """
        anchors = self.tree.find_by_attribute('a', 'name', descriptor.code)
        if not anchors:
            logger.info(f"Anchor not found for category: {descriptor.label} ({descriptor.code})")
            return SectionLookup.missing(descriptor, REASON_ANCHOR)

        anchor = anchors[0]
        match = self.strategy.locate(self.tree, anchor)
        if match is None:
            logger.info(f"Table not found for category: {descriptor.label} ({descriptor.code})")
            return SectionLookup.missing(descriptor, REASON_TABLE)

        logger.debug(f"Located table for {descriptor.code} via {match.strategy}")
        return SectionLookup.hit(SectionHandle(
            descriptor=descriptor,
            anchor=anchor,
            table=match.table,
            strategy=match.strategy
        ))

    def locate_all(self, catalog: Iterable[CategoryDescriptor]) -> List[SectionLookup]:
        """Locate every category, preserving catalog order."""
        return [self.locate(descriptor) for descriptor in catalog]
