"""
Layout Module for the Invoice Field Extraction Engine.

Positioned text structures and the geometric row grouper.

Author: ML Engineering Team
"""

from .fragment import BoundingBox, TextFragment, Row
from .grouper import group_into_rows, DEFAULT_ROW_TOLERANCE

__all__ = ['BoundingBox', 'TextFragment', 'Row', 'group_into_rows', 'DEFAULT_ROW_TOLERANCE']
