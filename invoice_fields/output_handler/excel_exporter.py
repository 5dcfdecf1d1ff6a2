"""
Excel Exporter Module.

This module provides Excel file generation for field extraction
results. Uses openpyxl for modern Excel format support.

Features:
    - One row per extracted field, with provenance columns
    - Formatted headers and auto column width
    - Per-document summary sheet

Author: ML Engineering Team
"""

from pathlib import Path
from typing import List, Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config import get_config
from invoice_fields.utils.exceptions import ExportError
from invoice_fields.utils.helpers import ensure_directory
from invoice_fields.utils.logger import get_logger
from .results import DocumentResult

# Initialize module logger
logger = get_logger(__name__)

THIN = Side(style='thin')
THIN_BORDER = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)


class ExcelExporter:
    """
    Exports extraction results to an Excel workbook.

    Attributes:
        sheet_name: Title of the field sheet
        include_summary: Whether to add the per-document summary sheet

    Example:
        >>> exporter = ExcelExporter()
        >>> exporter.export(results, "outputs/fields.xlsx")
    """

    FIELD_COLUMNS = [
        'Source File', 'Key', 'Field Type', 'Raw Value', 'Processed Value',
        'Confidence', 'Method', 'Passed', 'Fragment IDs',
    ]

    SUMMARY_COLUMNS = [
        'Source File', 'Document Type', 'Invoice Number', 'Invoice Date', 'Vendor',
        'Customer', 'Items', 'Identifiers', 'Total Amount', 'Tax Amount',
        'Fields', 'Average Confidence', 'Warnings',
    ]

    def __init__(self) -> None:
        self.sheet_name = get_config("output.excel.sheet_name", "Extracted Fields")
        self.include_summary = get_config("output.excel.include_summary", True)

    def export(
        self,
        results: Sequence[DocumentResult],
        filepath: Union[str, Path]
    ) -> str:
        """
        Write results to an .xlsx file.

        Args:
            results: Extraction results, one per document
            filepath: Destination path

        Returns:
            Path to the created file.

        Raises:
            ExportError: If there is nothing to export or writing fails.
        """
        filepath = Path(filepath)
        if not results:
            raise ExportError(str(filepath), "No results to export")

        ensure_directory(filepath.parent)

        try:
            workbook = Workbook()
            self._create_field_sheet(workbook, results)
            if self.include_summary:
                self._create_summary_sheet(workbook, results)
            workbook.save(filepath)
        except Exception as e:
            logger.error(f"Excel export failed: {e}")
            raise ExportError(str(filepath), str(e))

        logger.info(f"Excel file saved: {filepath} ({len(results)} documents)")
        return str(filepath)

    def _create_field_sheet(self, workbook: Workbook, results: Sequence[DocumentResult]) -> None:
        sheet = workbook.active
        sheet.title = self.sheet_name
        self._write_header(sheet, self.FIELD_COLUMNS, "4472C4")

        row_num = 2
        for result in results:
            for key, extracted in result.field_map.items():
                values = [
                    result.source_file,
                    key,
                    extracted.field_type.value,
                    extracted.raw_value,
                    extracted.processed_value,
                    round(extracted.confidence, 2),
                    extracted.validation.method.value,
                    extracted.validation.passed,
                    ', '.join(extracted.source_fragment_ids),
                ]
                for col, value in enumerate(values, 1):
                    sheet.cell(row=row_num, column=col, value=value).border = THIN_BORDER
                row_num += 1

        self._fit_columns(sheet, self.FIELD_COLUMNS, row_num)
        sheet.freeze_panes = 'A2'

    def _create_summary_sheet(self, workbook: Workbook, results: Sequence[DocumentResult]) -> None:
        sheet = workbook.create_sheet(title="Summary")
        self._write_header(sheet, self.SUMMARY_COLUMNS, "548235")

        for row_num, result in enumerate(results, 2):
            record = result.record
            values = [
                result.source_file,
                result.document_type.value,
                record.invoice_number,
                record.invoice_date.isoformat() if record.invoice_date else record.invoice_date_text,
                record.vendor_name,
                record.customer_name,
                len(record.items),
                ', '.join(record.identifiers),
                record.total_amount,
                record.tax_amount,
                len(result.field_map),
                round(result.field_map.average_confidence, 2),
                '; '.join(record.warnings),
            ]
            for col, value in enumerate(values, 1):
                sheet.cell(row=row_num, column=col, value=value)

        self._fit_columns(sheet, self.SUMMARY_COLUMNS, len(results) + 2)

    @staticmethod
    def _write_header(sheet, columns: List[str], color: str) -> None:
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
        for col, header_name in enumerate(columns, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = THIN_BORDER

    @staticmethod
    def _fit_columns(sheet, columns: List[str], end_row: int) -> None:
        for col, header_name in enumerate(columns, 1):
            max_length = len(header_name)
            for row in range(2, end_row):
                cell_value = sheet.cell(row=row, column=col).value
                if cell_value is not None:
                    max_length = max(max_length, len(str(cell_value)))
            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, 50)
