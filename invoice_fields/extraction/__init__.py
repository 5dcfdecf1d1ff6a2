"""
Extraction Module.

Rule-based extraction of invoice fields from positioned OCR text.
"""

from .field_result import (
    DocumentType,
    ExtractedField,
    FieldMap,
    FieldType,
    FieldValidation,
    ValidationMethod,
)
from .settings import ExtractionSettings
from .header import extract_header_fields, extract_vendor_contact
from .table import TableBounds, find_table_bounds
from .line_items import extract_line_items
from .totals import extract_totals
from .addresses import extract_addresses
from .generic import extract_generic_fields
from .orchestrator import FieldExtractor, extract_fields

__all__ = [
    'DocumentType',
    'ExtractedField',
    'FieldMap',
    'FieldType',
    'FieldValidation',
    'ValidationMethod',
    'ExtractionSettings',
    'extract_header_fields',
    'extract_vendor_contact',
    'TableBounds',
    'find_table_bounds',
    'extract_line_items',
    'extract_totals',
    'extract_addresses',
    'extract_generic_fields',
    'FieldExtractor',
    'extract_fields',
]
