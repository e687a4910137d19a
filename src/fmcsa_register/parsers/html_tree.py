"""
Document-tree query capability for register pages.

The extraction engine only talks to the DocumentTree interface:
- find elements by attribute value
- walk forward over following sibling elements
- read the (optionally whitespace-collapsed) text of a subtree
- move up to an enclosing element / forward to the next element of a tag

LxmlDocumentTree backs it with lxml's HTML parser, which recovers from the
unclosed and misnested rows the register is known to emit.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator, List, Optional

import lxml.html
from lxml import etree

from fmcsa_register.errors import DocumentParseError


Node = Any


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to a single space and trim."""
    return ' '.join(text.split())


class DocumentTree(ABC):
    """
    Abstract parsed document.

    Nodes are opaque to callers; they are only ever passed back into the
    tree's own query methods.
    """

    @abstractmethod
    def find_by_attribute(
        self,
        tag: str,
        attribute: str,
        value: str,
        scope: Optional[Node] = None
    ) -> List[Node]:
        """
        Find elements of ``tag`` whose ``attribute`` equals ``value``.

        Args:
            tag: Element name (lowercase)
            attribute: Attribute name
            value: Exact attribute value (case-sensitive)
            scope: Restrict the search to this node's descendants

        Returns:
            Matching elements in document order
        """
        pass

    @abstractmethod
    def following_siblings(
        self,
        node: Node,
        tag: Optional[str] = None,
        limit: Optional[int] = None,
        stop: Optional[Callable[[Node], bool]] = None
    ) -> Iterator[Node]:
        """
        Walk forward from ``node`` over its following sibling elements.

        Args:
            node: Starting element (not yielded)
            tag: Only yield siblings with this element name
            limit: Stop after yielding this many siblings
            stop: Stop (without yielding) at the first sibling for which
                this predicate is true

        Yields:
            Qualifying sibling elements in document order
        """
        pass

    @abstractmethod
    def next_element(self, node: Node) -> Optional[Node]:
        """Immediately following sibling element (comments skipped)."""
        pass

    @abstractmethod
    def enclosing(self, node: Node, tag: str) -> Optional[Node]:
        """Nearest ancestor element with the given name."""
        pass

    @abstractmethod
    def following(self, node: Node, tag: str) -> Optional[Node]:
        """First element with the given name after ``node``'s subtree ends."""
        pass

    @abstractmethod
    def matches(
        self,
        node: Node,
        tag: str,
        attribute: Optional[str] = None,
        value: Optional[str] = None
    ) -> bool:
        """Check element name and, optionally, an attribute value."""
        pass

    @abstractmethod
    def text_of(self, node: Node, collapse: bool = True) -> str:
        """
        Text content of a node's subtree.

        Args:
            node: Element to read
            collapse: Collapse whitespace runs to single spaces; otherwise
                only trim the ends
        """
        pass


class LxmlDocumentTree(DocumentTree):
    """
    DocumentTree backed by lxml.html.

    Example:
        >>> tree = LxmlDocumentTree('<html><body><a name="NC"></a><table></table></body></html>')
        >>> anchor = tree.find_by_attribute('a', 'name', 'NC')[0]
        >>> tree.matches(tree.next_element(anchor), 'table')
        True
    """

    def __init__(self, html: str):
        """
        Parse HTML text.

        The text is handed to lxml as UTF-8 bytes with a fixed parser
        encoding, so an XML prolog declaring another encoding is ignored
        instead of rejected.

        Raises:
            DocumentParseError: If the document has no parseable elements
        """
        parser = lxml.html.HTMLParser(encoding='utf-8')
        try:
            self.root = lxml.html.document_fromstring(html.encode('utf-8'), parser=parser)
        except (etree.ParserError, etree.XMLSyntaxError) as e:
            raise DocumentParseError(f"Could not parse register document: {e}") from e

    def find_by_attribute(
        self,
        tag: str,
        attribute: str,
        value: str,
        scope: Optional[Node] = None
    ) -> List[Node]:
        base = self.root if scope is None else scope
        # Variable binding keeps quotes in value from breaking the expression
        return base.xpath(f'.//{tag}[@{attribute}=$value]', value=value)

    def following_siblings(
        self,
        node: Node,
        tag: Optional[str] = None,
        limit: Optional[int] = None,
        stop: Optional[Callable[[Node], bool]] = None
    ) -> Iterator[Node]:
        yielded = 0
        for sibling in node.itersiblings():
            if not _is_element(sibling):
                continue
            if stop is not None and stop(sibling):
                return
            if tag is not None and sibling.tag != tag:
                continue
            if limit is not None and yielded >= limit:
                return
            yielded += 1
            yield sibling

    def next_element(self, node: Node) -> Optional[Node]:
        sibling = node.getnext()
        while sibling is not None and not _is_element(sibling):
            sibling = sibling.getnext()
        return sibling

    def enclosing(self, node: Node, tag: str) -> Optional[Node]:
        return next(node.iterancestors(tag), None)

    def following(self, node: Node, tag: str) -> Optional[Node]:
        matches = node.xpath(f'following::{tag}[1]')
        return matches[0] if matches else None

    def matches(
        self,
        node: Node,
        tag: str,
        attribute: Optional[str] = None,
        value: Optional[str] = None
    ) -> bool:
        if not _is_element(node) or node.tag != tag:
            return False
        if attribute is None:
            return True
        return node.get(attribute) == value

    def text_of(self, node: Node, collapse: bool = True) -> str:
        text = ''.join(node.itertext())
        if collapse:
            return collapse_whitespace(text)
        return text.strip()


def _is_element(node: Node) -> bool:
    """Comments and processing instructions have a non-string tag."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)
