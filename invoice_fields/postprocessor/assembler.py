"""
Invoice Assembler Module.

This module provides the InvoiceAssembler class that turns a flat
FieldMap into a structured invoice record: header values, typed totals,
a parsed invoice date and one LineItem per extracted product.

Operations:
    - Group ``product_{n}_*`` fields into line items
    - Split product descriptions into brand, model, variant and storage
    - Parse the invoice date (day first) and amounts
    - Flag missing required fields

Author: ML Engineering Team
"""

import json
import re
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from config import get_config
from invoice_fields.extraction.field_result import FieldMap
from invoice_fields.extraction.normalizers import AmountNormalizer, DateNormalizer
from invoice_fields.extraction.settings import default_settings
from invoice_fields.utils.helpers import collapse_whitespace
from invoice_fields.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

PRODUCT_KEY = re.compile(r'^product_(\d+)_(description|quantity|rate|amount|imei)$')
VARIANT_TOKEN = re.compile(r'\b(?:\d+GB|5G|4G|Pro|Plus|Max|Ultra|Lite)\b', re.IGNORECASE)
STORAGE_TOKEN = re.compile(r'\b(\d+)\s*GB\b', re.IGNORECASE)

HEADER_KEYS = {
    'invoice_number': 'invoice_number',
    'vendor_name': 'vendor_name',
    'gst_number': 'vendor_gstin',
    'vendor_phone': 'vendor_phone',
    'vendor_address': 'vendor_address',
    'customer_name': 'customer_name',
    'buyer_address': 'customer_address',
}


@dataclass
class LineItem:
    """
    One product line of an invoice.

    Attributes:
        index: Product number as extracted (1-based)
        description: Cleaned product description
        brand: Brand name found in the description
        model: Description without brand and variant tokens
        variant: Variant tokens (network, tier, storage) in order
        storage: Storage sizes joined with "/", e.g. "8GB/256GB"
        quantity: Quantity, 1.0 when not printed
        rate: Unit price, if found
        amount: Line total, if found
        identifier: Device identifier (IMEI), if found
    """
    index: int
    description: str
    brand: str = ""
    model: str = ""
    variant: str = ""
    storage: str = ""
    quantity: float = 1.0
    rate: Optional[float] = None
    amount: Optional[float] = None
    identifier: Optional[str] = None


@dataclass
class InvoiceRecord:
    """
    Structured view of one extracted invoice.

    Example:
        >>> record = InvoiceAssembler().assemble(field_map)
        >>> record.invoice_number
        "INV/2024/0451"
        >>> record.items[0].brand
        "Redmi"
    """
    invoice_number: Optional[str] = None
    invoice_date: Optional[date] = None
    invoice_date_text: Optional[str] = None
    vendor_name: Optional[str] = None
    vendor_gstin: Optional[str] = None
    vendor_phone: Optional[str] = None
    vendor_address: Optional[str] = None
    customer_name: Optional[str] = None
    customer_address: Optional[str] = None
    total_amount: Optional[float] = None
    tax_amount: Optional[float] = None
    items: List[LineItem] = field(default_factory=list)
    phone_numbers: List[str] = field(default_factory=list)
    average_confidence: float = 0.0
    source_file: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def identifiers(self) -> List[str]:
        """Device identifiers of all line items, in item order."""
        return [item.identifier for item in self.items if item.identifier]

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data['invoice_date'] = self.invoice_date.isoformat() if self.invoice_date else None
        data['identifiers'] = self.identifiers
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def split_description(description: str, brands: Sequence[str]) -> Dict[str, str]:
    """
    Split a product description into brand, model, variant and storage.

    Example:
        >>> split_description("Redmi Note 13 Pro 5g Phantom Purple 8gb 256gb", ["Redmi"])
        {'brand': 'Redmi', 'model': 'Note 13 Phantom Purple',
         'variant': 'Pro 5g 8gb 256gb', 'storage': '8GB/256GB'}
    """
    brand = ""
    remaining = description
    for candidate in brands:
        pattern = re.compile(r'\b' + re.escape(candidate) + r'\b', re.IGNORECASE)
        if pattern.search(description):
            brand = candidate
            remaining = pattern.sub('', description, count=1)
            break

    return {
        'brand': brand,
        'model': collapse_whitespace(VARIANT_TOKEN.sub(' ', remaining)),
        'variant': ' '.join(VARIANT_TOKEN.findall(remaining)),
        'storage': '/'.join(f"{size}GB" for size in STORAGE_TOKEN.findall(remaining)),
    }


class InvoiceAssembler:
    """
    Builds InvoiceRecord objects from extraction results.

    Attributes:
        date_normalizer: Parses normalized date text into dates
        amount_normalizer: Parses amount text into floats
        required_fields: Field keys whose absence is reported as a warning
        brands: Brand vocabulary used to split descriptions
    """

    def __init__(
        self,
        required_fields: Optional[List[str]] = None,
        brands: Optional[Sequence[str]] = None
    ) -> None:
        self.date_normalizer = DateNormalizer(
            dayfirst=get_config("postprocessing.date.dayfirst", True)
        )
        self.amount_normalizer = AmountNormalizer()
        self.required_fields = required_fields or get_config(
            "postprocessing.required_fields",
            ["invoice_number", "total_amount"]
        )
        self.brands = tuple(brands) if brands is not None else default_settings().brands

    def assemble(self, field_map: FieldMap, source_file: Optional[str] = None) -> InvoiceRecord:
        """
        Assemble a structured record from a FieldMap.

        Args:
            field_map: Result of ``extract_fields``
            source_file: Originating file name, for reporting

        Returns:
            InvoiceRecord; missing values stay None and required ones are
            listed in ``warnings``.
        """
        record = InvoiceRecord(source_file=source_file)

        for key, attribute in HEADER_KEYS.items():
            setattr(record, attribute, field_map.value(key))

        record.invoice_date_text = field_map.value('invoice_date')
        if record.invoice_date_text:
            record.invoice_date = self.date_normalizer.to_date(record.invoice_date_text)
            if record.invoice_date is None:
                record.add_warning(f"Could not parse invoice_date: '{record.invoice_date_text}'")

        record.total_amount = self.amount_normalizer.to_float(field_map.value('total_amount'))
        record.tax_amount = self.amount_normalizer.to_float(field_map.value('tax_amount'))
        record.items = self._line_items(field_map)
        record.phone_numbers = [
            f.processed_value for key, f in field_map.items() if key.startswith('phone_')
        ]
        record.average_confidence = field_map.average_confidence

        for required in self.required_fields:
            if required not in field_map:
                record.add_warning(f"Required field missing: {required}")

        logger.debug(
            f"Assembled invoice {record.invoice_number or '<unknown>'}: "
            f"{len(record.items)} items, {len(record.warnings)} warnings"
        )
        return record

    def _line_items(self, field_map: FieldMap) -> List[LineItem]:
        grouped: Dict[int, Dict[str, str]] = {}
        for key in field_map:
            match = PRODUCT_KEY.match(key)
            if match:
                grouped.setdefault(int(match.group(1)), {})[match.group(2)] = field_map.value(key)

        items = []
        for index in sorted(grouped):
            parts = grouped[index]
            description = parts.get('description')
            if not description:
                continue

            quantity = self.amount_normalizer.to_float(parts.get('quantity'))
            items.append(LineItem(
                index=index,
                description=description,
                quantity=quantity if quantity is not None else 1.0,
                rate=self.amount_normalizer.to_float(parts.get('rate')),
                amount=self.amount_normalizer.to_float(parts.get('amount')),
                identifier=parts.get('imei'),
                **split_description(description, self.brands)
            ))
        return items

    def summary(self, record: InvoiceRecord) -> str:
        """One-line human readable summary for logs and the CLI."""
        invoice_date = record.invoice_date.strftime("%d %b %Y") if record.invoice_date else "-"
        total = f"{record.total_amount:,.2f}" if record.total_amount is not None else "-"
        return (
            f"{record.invoice_number or '-'} | {invoice_date} | "
            f"{record.vendor_name or '-'} | items: {len(record.items)} | total: {total}"
        )
