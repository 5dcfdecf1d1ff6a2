"""
Source tracing helpers: link extracted values back to the fragments
they were read from, and build ExtractedField records.
"""

import re
from typing import Iterable, List, Optional, Sequence

from invoice_fields.layout.fragment import BoundingBox, TextFragment
from .field_result import ExtractedField, FieldType, FieldValidation, ValidationMethod


def find_source_fragments(
    fragments: Sequence[TextFragment],
    value: str
) -> List[TextFragment]:
    """Fragments whose text contains ``value``, case-insensitively."""
    if not value:
        return []
    needle = value.lower()
    return [f for f in fragments if needle in f.text.lower()]


def find_token_fragments(
    fragments: Sequence[TextFragment],
    token: str
) -> List[TextFragment]:
    """
    Fragments holding ``token`` as a standalone number, so "1" is not
    traced to "1.00 PCS" or "17,759.00".
    """
    if not token:
        return []
    pattern = re.compile(r'(?<![\w,.])' + re.escape(token) + r'(?![\d,]|\.\d)')
    return [f for f in fragments if pattern.search(f.text)]


def build_field(
    field_type: FieldType,
    raw_value: str,
    processed_value: str,
    confidence: float,
    method: ValidationMethod,
    sources: Iterable[TextFragment] = (),
    bounding_box: Optional[BoundingBox] = None,
) -> ExtractedField:
    """
    Build an accepted field; the validation record mirrors the rule's
    fixed confidence.
    """
    sources = list(sources)
    if bounding_box is None:
        bounding_box = BoundingBox.union(f.bounding_box for f in sources)

    return ExtractedField(
        field_type=field_type,
        raw_value=raw_value,
        processed_value=processed_value,
        confidence=confidence,
        validation=FieldValidation(method=method, passed=True, confidence=confidence),
        source_fragment_ids=tuple(f.fragment_id for f in sources),
        bounding_box=bounding_box,
    )


def traced_field(
    fragments: Sequence[TextFragment],
    field_type: FieldType,
    raw_value: str,
    processed_value: str,
    confidence: float,
    method: ValidationMethod = ValidationMethod.PATTERN_MATCHING,
) -> ExtractedField:
    """Build a field whose sources are the fragments containing the raw value."""
    return build_field(
        field_type,
        raw_value,
        processed_value,
        confidence,
        method,
        sources=find_source_fragments(fragments, raw_value),
    )
