"""
Generic extractor for documents that are neither invoices nor receipts.
"""

import re
from typing import Dict, Sequence

from invoice_fields.layout.fragment import TextFragment
from .field_result import ExtractedField, FieldType
from .tracing import traced_field

PHONE = re.compile(r'(?<!\d)(\d{10})(?!\d)')
PHONE_CONFIDENCE = 0.80


def extract_generic_fields(
    full_text: str,
    fragments: Sequence[TextFragment] = ()
) -> Dict[str, ExtractedField]:
    """Every standalone 10-digit number, as ``phone_1``, ``phone_2``, ..."""
    return {
        f"phone_{index}": traced_field(
            fragments, FieldType.PHONE_NUMBER, phone, phone, PHONE_CONFIDENCE
        )
        for index, phone in enumerate(PHONE.findall(full_text), start=1)
    }
