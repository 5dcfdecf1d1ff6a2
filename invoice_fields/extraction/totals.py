"""
Financial Summary Extractor.

The grand total is taken to be the last two-decimal amount printed on
the page; the tax amount is the first amount that follows a tax label.

Author: ML Engineering Team
"""

import re
from typing import Dict, Optional, Sequence

from invoice_fields.layout.fragment import TextFragment
from invoice_fields.utils.logger import get_logger
from .field_result import ExtractedField, FieldType, ValidationMethod
from .settings import ExtractionSettings, default_settings
from .tracing import traced_field

logger = get_logger(__name__)

TOTAL_CONFIDENCE = 0.85
TAX_CONFIDENCE = 0.80

AMOUNT = re.compile(r'(?<![\d,.])(\d{1,3}(?:,\d{2,3})+\.\d{2}|\d{2,}\.\d{2})(?!\d)')


def tax_pattern(lookahead_chars: int):
    # Label is a whole word and its amount sits on the same line
    return re.compile(
        r'\b(?:C\s*Gst|CGST|Tax)\b[^\n]{0,%d}?(\d[\d,]*\.\d{2})' % lookahead_chars,
        re.IGNORECASE
    )


def extract_totals(
    full_text: str,
    fragments: Sequence[TextFragment] = (),
    settings: Optional[ExtractionSettings] = None
) -> Dict[str, ExtractedField]:
    """
    Extract ``total_amount`` and ``tax_amount``.

    Args:
        full_text: Document text, one visual row per line
        fragments: Fragments used for source tracing
        settings: Extraction settings (tax label lookahead)

    Returns:
        Dictionary with zero, one or both keys.

    Example:
        >>> extract_totals("Subtotal 15,050.00\\nCGST 1,354.50\\nTotal 17,759.00")
        {'total_amount': ExtractedField(total_amount='17759.00', conf=0.85),
         'tax_amount': ExtractedField(tax_amount='1354.50', conf=0.80)}
    """
    settings = settings or default_settings()
    fields: Dict[str, ExtractedField] = {}

    amounts = AMOUNT.findall(full_text)
    if amounts:
        total = amounts[-1]
        fields['total_amount'] = traced_field(
            fragments,
            FieldType.TOTAL_AMOUNT,
            total,
            total.replace(',', ''),
            TOTAL_CONFIDENCE,
            ValidationMethod.CONTEXT_BASED,
        )
    else:
        logger.debug("No amount found for total")

    match = tax_pattern(settings.tax_lookahead_chars).search(full_text)
    if match:
        tax = match.group(1)
        fields['tax_amount'] = traced_field(
            fragments,
            FieldType.TAX_AMOUNT,
            tax,
            tax.replace(',', ''),
            TAX_CONFIDENCE,
        )
    else:
        logger.debug("No tax label followed by an amount")

    return fields
