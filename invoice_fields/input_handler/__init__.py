"""
Input Handler Module.

This module provides functionality for:
    - Loading OCR fragment documents from JSON files
    - Decoding the geometry shapes OCR tools emit
    - Adapting Tesseract ``image_to_data`` output to fragments

Author: ML Engineering Team
"""

from .loader import (
    FragmentDocument,
    FragmentLoader,
    fragment_from_record,
    fragments_from_tesseract_data,
    parse_bounding_box,
)

__all__ = [
    'FragmentDocument',
    'FragmentLoader',
    'fragment_from_record',
    'fragments_from_tesseract_data',
    'parse_bounding_box',
]
