"""
Header Field Matchers.

Runs the ordered rule lists from ``rules.HEADER_RULES`` against the
document's full text to pull out identification fields (invoice number,
date, GSTIN, vendor name), the vendor's contact number and the buyer
name.

Author: ML Engineering Team
"""

from typing import Dict, Iterable, Optional, Sequence

from invoice_fields.layout.fragment import TextFragment
from invoice_fields.utils.logger import get_logger
from .field_result import ExtractedField
from .rules import CONTACT_KEYS, HEADER_RULES
from .tracing import traced_field

# Initialize module logger
logger = get_logger(__name__)


def extract_header_fields(
    full_text: str,
    fragments: Sequence[TextFragment] = (),
    keys: Optional[Iterable[str]] = None
) -> Dict[str, ExtractedField]:
    """
    Extract header fields with ordered, first-match-wins rules.

    Args:
        full_text: Fragment texts joined with newlines
        fragments: Fragments used to trace each value back to its source
        keys: Restrict extraction to these field keys (default: all)

    Returns:
        Dictionary of field key to ExtractedField, in rule-table order.
        Keys with no matching rule are absent.

    Example:
        >>> fields = extract_header_fields("Invoice No: INV/2024/0451")
        >>> fields["invoice_number"].processed_value
        "INV/2024/0451"
    """
    wanted = HEADER_RULES.keys() if keys is None else set(keys)
    results: Dict[str, ExtractedField] = {}

    for key, field_rules in HEADER_RULES.items():
        if key not in wanted:
            continue

        hit = field_rules.first_match(full_text)
        if hit is None:
            logger.debug(f"No rule matched for '{key}'")
            continue

        match_rule, raw = hit
        raw = raw.strip()
        processed = field_rules.process(raw)

        logger.debug(f"{key}: '{processed}' via rule '{match_rule.name}'")
        results[key] = traced_field(
            fragments,
            field_rules.field_type,
            raw,
            processed,
            match_rule.confidence,
        )

    return results


def extract_vendor_contact(
    full_text: str,
    fragments: Sequence[TextFragment] = ()
) -> Dict[str, ExtractedField]:
    """Vendor phone number only."""
    return extract_header_fields(full_text, fragments, keys=CONTACT_KEYS)
