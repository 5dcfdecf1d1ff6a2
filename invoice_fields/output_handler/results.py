"""
Per-document result passed from the CLI to the output sinks.
"""

from dataclasses import dataclass
from typing import Any, Dict

from invoice_fields.extraction.field_result import DocumentType, FieldMap
from invoice_fields.postprocessor.assembler import InvoiceRecord


@dataclass
class DocumentResult:
    """
    Extraction output for one fragment document.

    Attributes:
        source_file: Name of the fragment file
        document_type: Type the document was extracted as
        field_map: Raw extraction result
        record: Structured invoice assembled from ``field_map``
    """
    source_file: str
    document_type: DocumentType
    field_map: FieldMap
    record: InvoiceRecord

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_file': self.source_file,
            'document_type': self.document_type.value,
            'fields': self.field_map.to_dict(),
            'invoice': self.record.to_dict(),
        }
