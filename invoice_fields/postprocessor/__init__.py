"""
Post-Processing Module.

This module turns flat extraction results into structured invoices:
    - Line items grouped by product number
    - Product descriptions split into brand, model and variant
    - Dates and amounts parsed into Python values
    - Missing required fields reported as warnings

Author: ML Engineering Team
"""

from .assembler import InvoiceAssembler, InvoiceRecord, LineItem, split_description

__all__ = ['InvoiceAssembler', 'InvoiceRecord', 'LineItem', 'split_description']
