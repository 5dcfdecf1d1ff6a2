"""Tests for writing extraction results to JSON and Excel."""

import json

import pytest
from openpyxl import load_workbook

from invoice_fields import DocumentType, extract_fields
from invoice_fields.output_handler import DocumentResult, ExcelExporter, OutputHandler
from invoice_fields.postprocessor import InvoiceAssembler
from invoice_fields.utils.exceptions import ExportError


@pytest.fixture
def result(invoice_fragments, settings):
    field_map = extract_fields(invoice_fragments, DocumentType.INVOICE, settings)
    record = InvoiceAssembler().assemble(field_map, source_file="sample.json")
    return DocumentResult("sample.json", DocumentType.INVOICE, field_map, record)


def test_json_export(result, tmp_path):
    path = OutputHandler().save(result, tmp_path / "out" / "fields.json")

    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    assert "generated_at" in payload
    document, = payload["documents"]
    assert document["source_file"] == "sample.json"
    assert document["document_type"] == "invoice"
    assert document["fields"]["total_amount"]["processed_value"] == "30258.00"
    assert document["invoice"]["total_amount"] == 30258.0
    assert list(document["fields"]) == list(result.field_map)


def test_excel_export(result, tmp_path):
    path = OutputHandler().save([result, result], tmp_path / "fields.xlsx")

    workbook = load_workbook(path)
    fields = workbook.worksheets[0]
    assert [cell.value for cell in fields[1]] == ExcelExporter.FIELD_COLUMNS
    assert fields.max_row == 1 + 2 * len(result.field_map)
    assert fields.cell(row=2, column=2).value == "invoice_number"
    assert fields.cell(row=2, column=5).value == "INV/2024/0451"

    summary = workbook["Summary"]
    assert [cell.value for cell in summary[1]] == ExcelExporter.SUMMARY_COLUMNS
    assert summary.max_row == 3
    assert summary.cell(row=2, column=3).value == "INV/2024/0451"
    assert summary.cell(row=2, column=4).value == "2025-10-30"
    assert summary.cell(row=2, column=7).value == 2


def test_excel_export_needs_results(tmp_path):
    with pytest.raises(ExportError):
        ExcelExporter().export([], tmp_path / "empty.xlsx")


def test_unsupported_extension(result, tmp_path):
    with pytest.raises(ExportError) as excinfo:
        OutputHandler().save(result, tmp_path / "fields.csv")
    assert ".csv" in excinfo.value.details["reason"]


def test_bare_file_name_goes_to_output_dir(result, tmp_path):
    handler = OutputHandler()
    handler.output_dir = tmp_path / "outputs"

    path = handler.save(result, "fields.json")

    assert path == str(tmp_path / "outputs" / "fields.json")
    assert (tmp_path / "outputs" / "fields.json").exists()
