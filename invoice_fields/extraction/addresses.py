"""
Address Extractor.

Anchors an address block on the first known place name found in the
document and files it as the vendor's or the buyer's address depending
on which half of the text it sits in.

Author: ML Engineering Team
"""

import re
from typing import Dict, Optional, Sequence

from invoice_fields.layout.fragment import TextFragment
from invoice_fields.utils.helpers import phrase_pattern
from invoice_fields.utils.logger import get_logger
from .field_result import ExtractedField, FieldType, ValidationMethod
from .normalizers import clean_address
from .settings import ExtractionSettings, default_settings
from .tracing import build_field

logger = get_logger(__name__)

ADDRESS_CONFIDENCE = 0.75


def extract_addresses(
    full_text: str,
    fragments: Sequence[TextFragment] = (),
    settings: Optional[ExtractionSettings] = None
) -> Dict[str, ExtractedField]:
    """
    Extract at most one address block.

    Place names are tried in gazetteer order and must appear as whole
    words; the first one present in the text wins. The block spans
    ``address_chars_before`` characters before its first occurrence and
    ``address_chars_after`` after it.

    Returns:
        ``{"vendor_address": ...}``, ``{"buyer_address": ...}`` or ``{}``.
    """
    settings = settings or default_settings()

    for place in settings.gazetteer:
        pattern = re.compile(phrase_pattern(place), re.IGNORECASE)
        match = pattern.search(full_text)
        if match is None:
            continue

        start = max(0, match.start() - settings.address_chars_before)
        end = min(len(full_text), match.end() + settings.address_chars_after)
        raw = full_text[start:end].strip()

        if match.start() < len(full_text) / 2:
            key, field_type = 'vendor_address', FieldType.VENDOR_ADDRESS
        else:
            key, field_type = 'buyer_address', FieldType.BILLING_ADDRESS

        logger.debug(f"{key} anchored on '{place}' at offset {match.start()}")
        return {
            key: build_field(
                field_type,
                raw,
                clean_address(raw),
                ADDRESS_CONFIDENCE,
                ValidationMethod.CONTEXT_BASED,
                sources=[f for f in fragments if pattern.search(f.text)],
            )
        }

    logger.debug("No gazetteer place name in text")
    return {}
