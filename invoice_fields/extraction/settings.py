"""
Extraction Settings Module.

Freezes the ``extraction`` section of settings.yaml into an immutable
object. Settings are read once and shared by every extraction call.

Author: ML Engineering Team
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from config import get_config
from invoice_fields.layout.grouper import DEFAULT_ROW_TOLERANCE

DEFAULT_BRANDS = (
    "Redmi", "Realme", "Samsung", "Vivo", "Oppo", "OnePlus", "iPhone",
    "Poco", "MI", "Motorola", "Nokia", "Infinix", "Itel", "Lava",
)

DEFAULT_GAZETTEER = (
    "Bihar", "Maharashtra", "Gujarat", "Karnataka", "Tamil Nadu", "Kerala",
    "Andhra Pradesh", "Telangana", "West Bengal", "Uttar Pradesh",
    "Madhya Pradesh", "Rajasthan", "Punjab", "Haryana", "Odisha",
    "Jharkhand", "Chhattisgarh", "Assam", "Delhi", "Goa",
)

DEFAULT_ANTI_CONTEXT = ("invoice", "irn", "ack", "reference")


@dataclass(frozen=True)
class ExtractionSettings:
    """
    Thresholds and vocabularies used by the extractors.

    Attributes:
        row_tolerance: Max top-edge distance between fragments of a row
        min_row_length: Rows with shorter joined text are noise
        identifier_lookahead_rows: Rows scanned below a product for its IMEI
        max_quantity: Largest plausible line quantity
        rate_range: Plausible unit price range (inclusive)
        amount_range: Plausible line total range (inclusive)
        address_chars_before: Address window before the place name
        address_chars_after: Address window after the place name
        tax_lookahead_chars: Max distance between a tax label and its amount
        brands: Device brands that open a product line
        gazetteer: Place names that anchor address blocks, in priority order
        identifier_anti_context: Row keywords that disqualify a 15-digit number
    """
    row_tolerance: float = DEFAULT_ROW_TOLERANCE
    min_row_length: int = 10
    identifier_lookahead_rows: int = 2
    max_quantity: float = 100
    rate_range: Tuple[float, float] = (1000, 100000)
    amount_range: Tuple[float, float] = (500, 200000)
    address_chars_before: int = 200
    address_chars_after: int = 50
    tax_lookahead_chars: int = 80
    brands: Tuple[str, ...] = DEFAULT_BRANDS
    gazetteer: Tuple[str, ...] = DEFAULT_GAZETTEER
    identifier_anti_context: Tuple[str, ...] = DEFAULT_ANTI_CONTEXT

    @classmethod
    def from_config(cls) -> 'ExtractionSettings':
        """Build settings from the ``extraction`` configuration section."""
        return cls(
            row_tolerance=get_config("extraction.row_tolerance", DEFAULT_ROW_TOLERANCE),
            min_row_length=get_config("extraction.min_row_length", 10),
            identifier_lookahead_rows=get_config("extraction.identifier_lookahead_rows", 2),
            max_quantity=get_config("extraction.quantity.max", 100),
            rate_range=(
                get_config("extraction.rate.min", 1000),
                get_config("extraction.rate.max", 100000),
            ),
            amount_range=(
                get_config("extraction.amount.min", 500),
                get_config("extraction.amount.max", 200000),
            ),
            address_chars_before=get_config("extraction.address.chars_before", 200),
            address_chars_after=get_config("extraction.address.chars_after", 50),
            tax_lookahead_chars=get_config("extraction.tax.lookahead_chars", 80),
            brands=tuple(get_config("extraction.brands", DEFAULT_BRANDS)),
            gazetteer=tuple(get_config("extraction.gazetteer", DEFAULT_GAZETTEER)),
            identifier_anti_context=tuple(
                get_config("extraction.identifier_anti_context", DEFAULT_ANTI_CONTEXT)
            ),
        )


@lru_cache(maxsize=1)
def default_settings() -> ExtractionSettings:
    """Settings loaded from configuration once per process."""
    return ExtractionSettings.from_config()
