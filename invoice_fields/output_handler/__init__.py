"""
Output Handler Module.

This module provides functionality for:
    - JSON export of field maps and assembled invoices
    - Excel workbook generation with a per-field sheet and a summary

Author: ML Engineering Team
"""

from .results import DocumentResult
from .handler import OutputHandler
from .excel_exporter import ExcelExporter
from .json_exporter import JSONExporter

__all__ = ['DocumentResult', 'OutputHandler', 'ExcelExporter', 'JSONExporter']
