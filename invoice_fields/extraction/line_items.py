"""
Line-Item Extractor.

Walks the rows of the line-item table and turns every row that reads
like a device product (brand name plus a storage size) into a numbered
set of fields:

    product_{n}_description, product_{n}_quantity, product_{n}_rate,
    product_{n}_amount, product_{n}_imei

Product numbers start at 1 and have no gaps.

Author: ML Engineering Team
"""

import re
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from invoice_fields.layout.fragment import Row, TextFragment
from invoice_fields.utils.helpers import parse_number, phrase_pattern
from invoice_fields.utils.logger import get_logger
from invoice_fields.validation import find_identifiers, validate_identifier
from .field_result import ExtractedField, FieldType, ValidationMethod
from .settings import ExtractionSettings, default_settings
from .table import TableBounds
from .tracing import build_field, find_source_fragments, find_token_fragments

# Initialize module logger
logger = get_logger(__name__)

DESCRIPTION_CONFIDENCE = 0.92
QUANTITY_CONFIDENCE = 0.90
PRICE_CONFIDENCE = 0.90
IDENTIFIER_CONFIDENCE = 0.95

ROW_LABELS = (
    r'State\s+Name', r'State\s+Code', r'GSTIN', r'UIN', r'Mob\s*No', r'Email',
    r'Consignee', r'Buyer', r'Seller', r'Terms\s+of\s+Delivery',
)

# Description ends at the HSN code, the "<n> PCS" quantity or a price
DESCRIPTION_STOPS = (
    re.compile(r'\s+\d{4,8}(?:\s+|$)'),
    re.compile(r'\s+\d+(?:\.\d+)?\s+PCS', re.IGNORECASE),
    re.compile(r'\s+\d{2,3}[,\d]*\.\d{2}'),
)
HSN_CODE = re.compile(r'^\s+\d{4,8}(?=\s|$)')
STORAGE = re.compile(r'\d+gb', re.IGNORECASE)
QUANTITY_PCS = re.compile(r'(\d+(?:\.\d+)?)\s*PCS', re.IGNORECASE)
QUANTITY_CELL = re.compile(r'^\d{1,2}$')
NUMBER_TOKEN = re.compile(
    r'(?<![\w,.])(\d{1,3}(?:,\d{2,3})+(?:\.\d{2})?|\d+(?:\.\d{2})?)(?![\w,])'
)


def _word_alternation(words: Sequence[str]) -> str:
    return '|'.join(re.escape(word) for word in words)


def build_exclusion_pattern(gazetteer: Sequence[str]) -> Pattern:
    """Rows naming a state or carrying party/contact labels are not products."""
    places = [phrase_pattern(place) for place in gazetteer]
    return re.compile(r'\b(?:' + '|'.join(places + list(ROW_LABELS)) + r')\b', re.IGNORECASE)


def build_product_gate(brands: Sequence[str]) -> Pattern:
    """Brand name followed by a storage size (``8gb``, OCR variant ``8pg``)."""
    return re.compile(
        r'\b(?:' + _word_alternation(brands) + r')\b\s+[\w\s]+?\d+(?:gb|pg)',
        re.IGNORECASE
    )


def split_description(product_text: str) -> Tuple[str, str]:
    """
    Split text starting at the brand into (description, remainder).

    Example:
        >>> split_description("Redmi Note 13 8gb 256gb 8517 1.00 PCS 17,759.00")
        ("Redmi Note 13 8gb 256gb", " 8517 1.00 PCS 17,759.00")
    """
    cut = len(product_text)
    for stop in DESCRIPTION_STOPS:
        match = stop.search(product_text)
        if match:
            cut = min(cut, match.start())
    return product_text[:cut].strip(), product_text[cut:]


class LineItemExtractor:
    """
    Extracts numbered product fields from table rows.

    Attributes:
        settings: Numeric ranges, vocabularies and lookahead depth
    """

    def __init__(self, settings: Optional[ExtractionSettings] = None):
        self.settings = settings or default_settings()
        self._exclusion = build_exclusion_pattern(self.settings.gazetteer)
        self._gate = build_product_gate(self.settings.brands)

    def extract(self, rows: Sequence[Row], bounds: TableBounds) -> Dict[str, ExtractedField]:
        """
        Extract product fields from ``rows[bounds.start:bounds.end]``.

        Args:
            rows: All rows of the document, top to bottom
            bounds: Table range from the boundary detector

        Returns:
            Product fields keyed ``product_{n}_{part}``.
        """
        fields: Dict[str, ExtractedField] = {}
        index = 1

        for row_index in range(bounds.start, min(bounds.end, len(rows))):
            row = rows[row_index]
            product = self._extract_product(row)
            if product is None:
                continue

            description, price_text = product
            prefix = f"product_{index}"
            fields[f"{prefix}_description"] = build_field(
                FieldType.ITEM_DESCRIPTION,
                row.text,
                description,
                DESCRIPTION_CONFIDENCE,
                ValidationMethod.CONTEXT_BASED,
                sources=row.fragments,
                bounding_box=row.bounding_box,
            )

            quantity = self._find_quantity(row)
            if quantity is not None:
                fields[f"{prefix}_quantity"] = self._row_field(
                    row, FieldType.ITEM_QUANTITY, quantity, quantity, QUANTITY_CONFIDENCE
                )

            rate, amount = self._find_prices(price_text)
            if rate is not None:
                fields[f"{prefix}_rate"] = self._row_field(
                    row, FieldType.ITEM_RATE, rate, rate.replace(',', ''), PRICE_CONFIDENCE
                )
            if amount is not None:
                fields[f"{prefix}_amount"] = self._row_field(
                    row, FieldType.ITEM_AMOUNT, amount, amount.replace(',', ''), PRICE_CONFIDENCE
                )

            identifier = self._find_identifier(rows, row_index)
            if identifier is not None:
                value, sources = identifier
                fields[f"{prefix}_imei"] = build_field(
                    FieldType.DEVICE_IDENTIFIER,
                    value,
                    value,
                    IDENTIFIER_CONFIDENCE,
                    ValidationMethod.LUHN_ALGORITHM,
                    sources=sources,
                )

            logger.debug(f"{prefix}: '{description}'")
            index += 1

        return fields

    def _extract_product(self, row: Row) -> Optional[Tuple[str, str]]:
        """
        Description and the text to read prices from, or None if the row
        is no product. Prices are read from the brand onwards, minus the
        HSN code that ends the description.
        """
        text = row.text
        if len(text.strip()) < self.settings.min_row_length:
            return None
        if self._exclusion.search(text):
            return None

        gate = self._gate.search(text)
        if gate is None:
            return None

        product_text = text[gate.start():]
        description, remainder = split_description(product_text)
        if not STORAGE.search(description) or len(description) <= 5:
            logger.debug(f"Rejected product candidate '{description}'")
            return None
        head = product_text[:len(product_text) - len(remainder)]
        return description, head + HSN_CODE.sub('', remainder, count=1)

    def _find_quantity(self, row: Row) -> Optional[str]:
        match = QUANTITY_PCS.search(row.text)
        if match and float(match.group(1)) <= self.settings.max_quantity:
            return match.group(1)

        for fragment in row:
            text = fragment.text.strip()
            if QUANTITY_CELL.match(text) and int(text) <= self.settings.max_quantity:
                return text
        return None

    def _find_prices(self, text: str) -> Tuple[Optional[str], Optional[str]]:
        """First token in the rate range and last token in the amount range."""
        tokens = NUMBER_TOKEN.findall(text)
        rate_min, rate_max = self.settings.rate_range
        amount_min, amount_max = self.settings.amount_range

        rate = None
        amount = None
        for token in tokens:
            value = parse_number(token)
            if value is None:
                continue
            if rate is None and rate_min <= value <= rate_max:
                rate = token
            if amount_min <= value <= amount_max:
                amount = token
        return rate, amount

    def _find_identifier(
        self,
        rows: Sequence[Row],
        row_index: int
    ) -> Optional[Tuple[str, List[TextFragment]]]:
        """Look below a product row for a checksum-valid 15-digit identifier."""
        lookahead = rows[row_index + 1:row_index + 1 + self.settings.identifier_lookahead_rows]

        for row in lookahead:
            lowered = row.text.lower()
            if any(word in lowered for word in self.settings.identifier_anti_context):
                continue

            for candidate in find_identifiers(row.text):
                if validate_identifier(candidate):
                    return candidate, find_source_fragments(row.fragments, candidate)
                logger.debug(f"Rejected identifier candidate {candidate}")
        return None

    @staticmethod
    def _row_field(
        row: Row,
        field_type: FieldType,
        raw: str,
        processed: str,
        confidence: float
    ) -> ExtractedField:
        return build_field(
            field_type,
            raw,
            processed,
            confidence,
            ValidationMethod.PATTERN_MATCHING,
            sources=find_token_fragments(row.fragments, raw),
        )


def extract_line_items(
    rows: Sequence[Row],
    bounds: TableBounds,
    settings: Optional[ExtractionSettings] = None
) -> Dict[str, ExtractedField]:
    """Extract product fields from the table rows of a document."""
    return LineItemExtractor(settings).extract(rows, bounds)
