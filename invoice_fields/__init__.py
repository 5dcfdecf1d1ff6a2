"""
Invoice Field Extraction Engine.

Reconstructs the logical structure of a photographed invoice from OCR
text fragments: header fields, parties, line items with device
identifiers and the financial summary, each with a confidence score and
the fragments it was read from.

Modules:
    - layout: Fragments, bounding boxes and row grouping
    - validation: Device identifier checksum validation
    - extraction: Rule-based field extraction
    - input_handler: Fragment JSON loading
    - postprocessor: Structured invoice assembly
    - output_handler: JSON and Excel output

Architecture:
    Fragments → Rows → {Header, Table, Totals, Addresses} → FieldMap
                                                         ↓
                                                 Invoice Record → Output
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

from invoice_fields.layout import BoundingBox, TextFragment
from invoice_fields.extraction import DocumentType, FieldMap, extract_fields

__all__ = [
    'BoundingBox',
    'TextFragment',
    'DocumentType',
    'FieldMap',
    'extract_fields',
]
