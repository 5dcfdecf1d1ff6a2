"""
Extracted Field Data Classes.

This module defines the data structures produced by field extraction,
providing a standardized format for extracted values, their confidence
and their provenance.

Classes:
    DocumentType: Selects which extraction strategy set runs
    FieldType: Semantic category of an extracted field
    ValidationMethod: How a field's value was accepted
    FieldValidation: Validation outcome attached to a field
    ExtractedField: One extracted value with confidence and sources
    FieldMap: Read-only, ordered mapping of field keys to fields

Author: ML Engineering Team
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from invoice_fields.layout.fragment import BoundingBox
from invoice_fields.utils.exceptions import PreconditionError


class DocumentType(Enum):
    """Declared document type; selects the extraction strategy set."""
    INVOICE = "invoice"
    RECEIPT = "receipt"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> 'DocumentType':
        """
        Parse a document type name, case-insensitively.

        Raises:
            ValueError: If the name is not a known document type.
        """
        return cls(str(value).strip().lower())


class FieldType(Enum):
    INVOICE_NUMBER = "invoice_number"
    INVOICE_DATE = "invoice_date"
    GST_NUMBER = "gst_number"
    VENDOR_NAME = "vendor_name"
    CUSTOMER_NAME = "customer_name"
    VENDOR_ADDRESS = "vendor_address"
    BILLING_ADDRESS = "billing_address"
    PHONE_NUMBER = "phone_number"
    ITEM_DESCRIPTION = "item_description"
    ITEM_QUANTITY = "item_quantity"
    ITEM_RATE = "item_rate"
    ITEM_AMOUNT = "item_amount"
    DEVICE_IDENTIFIER = "device_identifier"
    TOTAL_AMOUNT = "total_amount"
    TAX_AMOUNT = "tax_amount"


class ValidationMethod(Enum):
    PATTERN_MATCHING = "pattern_matching"
    CONTEXT_BASED = "context_based"
    LUHN_ALGORITHM = "luhn_algorithm"


def _check_confidence(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise PreconditionError(name, value, "confidence must be within [0, 1]")


@dataclass(frozen=True)
class FieldValidation:
    """
    Validation outcome attached to an extracted field.

    Attributes:
        method: Rule family that accepted the value
        passed: Whether validation passed
        confidence: Confidence of the validation step (0-1)
    """
    method: ValidationMethod
    passed: bool
    confidence: float

    def __post_init__(self):
        _check_confidence("validation.confidence", self.confidence)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'method': self.method.value,
            'passed': self.passed,
            'confidence': self.confidence,
        }


@dataclass(frozen=True)
class ExtractedField:
    """
    Represents one extracted field value.

    Attributes:
        field_type: Semantic category of the field
        raw_value: Text as matched in the document
        processed_value: Normalized value (dates, amounts without commas)
        confidence: Fixed per-rule confidence score (0-1)
        source_fragment_ids: Fragments the value was read from (may be empty)
        bounding_box: Union box of the source fragments, if known
        validation: Validation outcome

    Example:
        >>> field = ExtractedField(
        ...     field_type=FieldType.INVOICE_NUMBER,
        ...     raw_value="INV/2024/0451",
        ...     processed_value="INV/2024/0451",
        ...     confidence=0.95,
        ...     validation=FieldValidation(ValidationMethod.PATTERN_MATCHING, True, 0.95)
        ... )
    """
    field_type: FieldType
    raw_value: str
    processed_value: str
    confidence: float
    validation: FieldValidation
    source_fragment_ids: Tuple[str, ...] = field(default_factory=tuple)
    bounding_box: Optional[BoundingBox] = None

    def __post_init__(self):
        _check_confidence("confidence", self.confidence)
        # Keep first-seen order, drop duplicates
        object.__setattr__(
            self, 'source_fragment_ids', tuple(dict.fromkeys(self.source_fragment_ids))
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for serialization."""
        return {
            'field_type': self.field_type.value,
            'raw_value': self.raw_value,
            'processed_value': self.processed_value,
            'confidence': self.confidence,
            'source_fragment_ids': list(self.source_fragment_ids),
            'bounding_box': self.bounding_box.to_list() if self.bounding_box else None,
            'validation': self.validation.to_dict(),
        }

    def __repr__(self) -> str:
        return (
            f"ExtractedField({self.field_type.value}='{self.processed_value}', "
            f"conf={self.confidence:.2f})"
        )


class FieldMap(Mapping):
    """
    Read-only mapping from field key to ExtractedField.

    Insertion order reflects extraction order. Partial results are
    combined with ``merge``, where the first writer of a key wins.

    Example:
        >>> field_map = extract_fields(fragments, DocumentType.INVOICE)
        >>> field_map["invoice_number"].processed_value
        "INV/2024/0451"
        >>> print(field_map.to_json())
    """

    def __init__(self, fields: Optional[Mapping] = None) -> None:
        self._fields: Dict[str, ExtractedField] = dict(fields or {})

    @classmethod
    def merge(cls, *partials: Mapping) -> 'FieldMap':
        """
        Merge partial results; a key already present is never overwritten.
        """
        merged: Dict[str, ExtractedField] = {}
        for partial in partials:
            for key, value in partial.items():
                merged.setdefault(key, value)
        return cls(merged)

    def __getitem__(self, key: str) -> ExtractedField:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Processed value of a field, or default when absent."""
        extracted = self._fields.get(key)
        return extracted.processed_value if extracted else default

    @property
    def average_confidence(self) -> float:
        if not self._fields:
            return 0.0
        return sum(f.confidence for f in self._fields.values()) / len(self._fields)

    def to_dict(self) -> Dict[str, Any]:
        return {key: value.to_dict() for key, value in self._fields.items()}

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return f"FieldMap(fields={len(self)}, keys={list(self._fields)})"
