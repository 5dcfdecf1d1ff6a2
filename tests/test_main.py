"""Tests for the command-line entry point."""

import json

from conftest import SAMPLE_INVOICE_LINES, layout
from main import main, run_extraction


def write_sample(path, document_type=None):
    records = [
        {"id": f.fragment_id, "text": f.text, "bbox": f.bounding_box.to_list()}
        for f in layout(SAMPLE_INVOICE_LINES)
    ]
    payload = {"fragments": records}
    if document_type:
        payload["document_type"] = document_type
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_run_extraction_on_file(tmp_path):
    results = run_extraction(str(write_sample(tmp_path / "invoice.json")))

    result, = results
    assert result.source_file == "invoice.json"
    assert result.record.invoice_number == "INV/2024/0451"
    assert len(result.record.items) == 2


def test_document_type_override(tmp_path):
    write_sample(tmp_path / "invoice.json", document_type="invoice")
    result, = run_extraction(str(tmp_path / "invoice.json"), document_type="other")
    assert list(result.field_map) == ["phone_1"]


def test_main_writes_output(tmp_path):
    write_sample(tmp_path / "a.json")
    write_sample(tmp_path / "b.json", document_type="receipt")
    output = tmp_path / "results.json"

    assert main(["--input", str(tmp_path), "--output", str(output), "--quiet"]) == 0

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert [d["document_type"] for d in payload["documents"]] == ["invoice", "receipt"]


def test_main_missing_input(tmp_path):
    assert main(["--input", str(tmp_path / "missing.json"), "--quiet"]) == 1


def test_main_empty_directory(tmp_path):
    assert main(["--input", str(tmp_path), "--quiet"]) == 1


def test_main_skips_undecodable_file(tmp_path):
    (tmp_path / "scan.json").write_bytes(b"\xff\xfe\x00garbage")
    assert main(["--input", str(tmp_path), "--quiet"]) == 1


def test_main_keeps_going_after_undecodable_file(tmp_path):
    (tmp_path / "a.json").write_bytes(b"\xff\xfe\x00garbage")
    write_sample(tmp_path / "b.json")
    output = tmp_path / "results.json"

    assert main(["--input", str(tmp_path), "--output", str(output), "--quiet"]) == 0

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert [d["source_file"] for d in payload["documents"]] == ["b.json"]
