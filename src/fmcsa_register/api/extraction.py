"""
Register extraction orchestrator.

RegisterExtractor coordinates one extraction pass:
- Validate the document carries the register signature
- Parse HTML into a document tree
- Locate each category section, in catalog order
- Rebuild records from every located section
- Deduplicate across categories

Design Philosophy:
- No I/O: the fetched document is handed in, the result handed back
- Resilient: a missing category is logged and skipped, never fatal
- Deterministic: catalog order drives the deduplication tie-break
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union
import logging

from fmcsa_register.config import get_app_config, get_category_catalog
from fmcsa_register.errors import UnexpectedDocumentError
from fmcsa_register.models.category import CategoryDescriptor
from fmcsa_register.models.document import RawDocument
from fmcsa_register.models.entry import Entry
from fmcsa_register.models.result import ExtractionResult
from fmcsa_register.parsers.deduplicator import deduplicate_entries
from fmcsa_register.parsers.html_tree import LxmlDocumentTree
from fmcsa_register.parsers.record_extractor import extract_section_entries
from fmcsa_register.parsers.section_locator import (
    SectionLocator,
    TableLocationStrategy,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryOutcome:
    """Per-category result of one extraction pass."""
    code: str
    label: str
    found: bool
    reason: Optional[str] = None  # 'anchor' or 'table' when not found
    records: int = 0
    dropped: int = 0


class RegisterExtractor:
    """
    Extraction engine for FMCSA register pages.

    The catalog and table-location strategy are fixed at construction;
    each extract() call is independent and keeps no state.

    Example:
        >>> extractor = RegisterExtractor()
        >>> result = extractor.extract(RawDocument(html=html, request_date='05-JAN-24'))
        >>> result.count
        42
    """

    def __init__(
        self,
        catalog: Optional[Iterable[CategoryDescriptor]] = None,
        strategy: Optional[TableLocationStrategy] = None,
        marker: Optional[str] = None
    ):
        """
        Initialize extractor.

        Args:
            catalog: Ordered categories to extract (default: packaged categories.yaml)
            strategy: Table-location strategy (default: next sibling → enclosing table)
            marker: Document signature used when extract() is given plain HTML
                (default: AppConfig.document_marker)
        """
        self.catalog: Tuple[CategoryDescriptor, ...] = (
            tuple(catalog) if catalog is not None else get_category_catalog()
        )
        self.strategy = strategy
        self.marker = marker or get_app_config().document_marker

    def extract(
        self,
        document: Union[RawDocument, str],
        request_date: Optional[str] = None
    ) -> ExtractionResult:
        """
        Extract deduplicated entries from a register page.

        Args:
            document: RawDocument, or plain HTML text
            request_date: Date the page was requested for; overrides the
                document's own request_date and is echoed verbatim

        Returns:
            ExtractionResult

        Raises:
            UnexpectedDocumentError: If the page lacks the register signature
        """
        result, _ = self.extract_with_outcomes(document, request_date)
        return result

    def extract_with_outcomes(
        self,
        document: Union[RawDocument, str],
        request_date: Optional[str] = None
    ) -> Tuple[ExtractionResult, List[CategoryOutcome]]:
        """
        Same as extract(), also returning what happened to each category.

        Returns:
            (ExtractionResult, list of CategoryOutcome in catalog order)
        """
        if isinstance(document, str):
            document = RawDocument(html=document, request_date=request_date, marker=self.marker)

        source_date = request_date if request_date is not None else document.request_date

        if not document.has_signature:
            logger.error(
                f"Document for {source_date} does not contain '{document.marker}'; "
                f"skipping extraction"
            )
            raise UnexpectedDocumentError(document.marker)

        tree = LxmlDocumentTree(document.html)
        locator = SectionLocator(tree, strategy=self.strategy)

        collected: List[Entry] = []
        outcomes: List[CategoryOutcome] = []

        for descriptor in self.catalog:
            lookup = locator.locate(descriptor)
            if not lookup.found:
                outcomes.append(CategoryOutcome(
                    code=descriptor.code,
                    label=descriptor.label,
                    found=False,
                    reason=lookup.reason
                ))
                continue

            records = extract_section_entries(tree, lookup.handle)
            collected.extend(records.entries)
            outcomes.append(CategoryOutcome(
                code=descriptor.code,
                label=descriptor.label,
                found=True,
                records=len(records.entries),
                dropped=records.dropped
            ))

        entries = deduplicate_entries(collected)

        found_count = sum(1 for o in outcomes if o.found)
        logger.info(
            f"Extracted {len(entries)} unique entries for {source_date} "
            f"({len(collected)} before deduplication, "
            f"{found_count}/{len(outcomes)} categories found)"
        )

        return ExtractionResult.build(entries=entries, source_date=source_date), outcomes


def extract_register(
    document: Union[RawDocument, str],
    request_date: Optional[str] = None,
    catalog: Optional[Iterable[CategoryDescriptor]] = None
) -> ExtractionResult:
    """
    Extract entries from a register page with the default configuration.

    Args:
        document: RawDocument, or plain HTML text
        request_date: Request date echoed into the result
        catalog: Optional category catalog override

    Returns:
        ExtractionResult

    Raises:
        UnexpectedDocumentError: If the page lacks the register signature

    Example:
        >>> result = extract_register(html, request_date='05-JAN-24')
        >>> result.to_response()['date']
        '05-JAN-24'
    """
    return RegisterExtractor(catalog=catalog).extract(document, request_date)
