"""
Field Extraction Orchestrator.

The single public entry point of the extraction engine. It concatenates
the fragments into the document's full text, groups them into rows, runs
each extractor in a fixed order and merges the partial results into one
FieldMap, where the first extractor to produce a key keeps it.

Order for invoices and receipts:
    1. Header identification and party fields
    2. Vendor contact number
    3. Line items (rows → table bounds → products)
    4. Financial summary (read from row text)
    5. Addresses

Other documents only get the generic phone-number scan.

Author: ML Engineering Team
"""

import time
from typing import Dict, List, Optional, Sequence

from invoice_fields.layout.fragment import TextFragment
from invoice_fields.layout.grouper import group_into_rows
from invoice_fields.utils.logger import get_logger
from .addresses import extract_addresses
from .field_result import DocumentType, ExtractedField, FieldMap
from .generic import extract_generic_fields
from .header import extract_header_fields, extract_vendor_contact
from .line_items import extract_line_items
from .rules import IDENTIFICATION_KEYS, PARTY_KEYS
from .settings import ExtractionSettings, default_settings
from .table import find_table_bounds
from .totals import extract_totals

# Initialize module logger
logger = get_logger(__name__)


def join_text(fragments: Sequence[TextFragment]) -> str:
    """Full document text: fragment texts in input order, one per line."""
    return '\n'.join(fragment.text for fragment in fragments)


class FieldExtractor:
    """
    Rule-based invoice field extractor.

    Stateless apart from its frozen settings, so one instance may be
    shared between threads.

    Attributes:
        settings: Extraction thresholds and vocabularies

    Example:
        >>> extractor = FieldExtractor()
        >>> field_map = extractor.extract_fields(fragments, DocumentType.INVOICE)
        >>> field_map.value("invoice_number")
        "INV/2024/0451"
    """

    def __init__(self, settings: Optional[ExtractionSettings] = None) -> None:
        self.settings = settings or default_settings()

    def extract_fields(
        self,
        fragments: Sequence[TextFragment],
        document_type: DocumentType = DocumentType.INVOICE
    ) -> FieldMap:
        """
        Extract every recognisable field from OCR fragments.

        Missing fields are simply absent; this method does not raise for
        unrecognised content.

        Args:
            fragments: OCR text fragments, in reading order
            document_type: Selects the extractor set

        Returns:
            FieldMap in extraction order.
        """
        fragments = list(fragments)
        if not fragments:
            logger.debug("No fragments given")
            return FieldMap()

        start_time = time.time()
        full_text = join_text(fragments)

        if document_type is DocumentType.OTHER:
            partials = [extract_generic_fields(full_text, fragments)]
        else:
            partials = self._invoice_partials(fragments, full_text)

        field_map = FieldMap.merge(*partials)

        logger.info(
            f"Extraction complete: {len(field_map)} fields from {len(fragments)} fragments "
            f"({document_type.value}), avg confidence: {field_map.average_confidence:.2f}, "
            f"time: {time.time() - start_time:.3f}s"
        )
        return field_map

    def _invoice_partials(
        self,
        fragments: List[TextFragment],
        full_text: str
    ) -> List[Dict[str, ExtractedField]]:
        header = extract_header_fields(
            full_text, fragments, keys=IDENTIFICATION_KEYS + PARTY_KEYS
        )
        logger.debug(f"Header fields: {list(header)}")

        contact = extract_vendor_contact(full_text, fragments)
        logger.debug(f"Contact fields: {list(contact)}")

        rows = group_into_rows(fragments, self.settings.row_tolerance)
        bounds = find_table_bounds(rows)
        items = extract_line_items(rows, bounds, self.settings)
        logger.debug(f"Line item fields: {len(items)} from {len(rows)} rows")

        # Label and amount cells of one row share a line
        row_text = '\n'.join(row.text for row in rows)
        totals = extract_totals(row_text, fragments, self.settings)
        logger.debug(f"Summary fields: {list(totals)}")

        addresses = extract_addresses(full_text, fragments, self.settings)
        logger.debug(f"Address fields: {list(addresses)}")

        return [header, contact, items, totals, addresses]


def extract_fields(
    fragments: Sequence[TextFragment],
    document_type: DocumentType = DocumentType.INVOICE,
    settings: Optional[ExtractionSettings] = None
) -> FieldMap:
    """
    Extract fields from OCR fragments.

    Example:
        >>> field_map = extract_fields(fragments, DocumentType.INVOICE)
        >>> print(field_map.to_json())
    """
    return FieldExtractor(settings).extract_fields(fragments, document_type)
