"""
Validation Module for the Invoice Field Extraction Engine.

Checksum validation of device identifiers found in line items.

Author: ML Engineering Team
"""

from .checksum import (
    validate_identifier,
    identifier_error,
    clean_identifier,
    format_identifier,
    find_identifiers,
)

__all__ = [
    'validate_identifier',
    'identifier_error',
    'clean_identifier',
    'format_identifier',
    'find_identifiers',
]
