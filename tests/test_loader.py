"""Tests for reading OCR fragment files."""

import json

import pytest

from invoice_fields.extraction import DocumentType
from invoice_fields.input_handler import FragmentLoader
from invoice_fields.input_handler.loader import fragments_from_tesseract_data, parse_bounding_box
from invoice_fields.layout import BoundingBox
from invoice_fields.utils.exceptions import (
    FragmentFormatError,
    InputError,
    UnsupportedFileTypeError,
)


@pytest.fixture
def loader():
    return FragmentLoader()


def write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestParseBoundingBox:

    def test_edge_list(self):
        assert parse_bounding_box([10, 20, 110, 40]) == BoundingBox(10, 20, 110, 40)

    def test_edge_mapping(self):
        box = parse_bounding_box({"left": 1, "top": 2, "right": 3, "bottom": 4})
        assert box == BoundingBox(1, 2, 3, 4)

    def test_polygon(self):
        box = parse_bounding_box([[110, 20], [10, 20], [10, 40], [110, 40]])
        assert box == BoundingBox(10, 20, 110, 40)

    @pytest.mark.parametrize("value", [None, "10,20,30,40", [1, 2, 3], {"left": 1}, ["a", 2, 3, 4]])
    def test_unusable_values(self, value):
        assert parse_bounding_box(value) is None


class TestParse:

    def test_list_of_records(self, loader):
        document = loader.parse([
            {"id": "a1", "text": " Invoice No: 7 ", "bbox": [0, 0, 100, 20]},
            {"text": "Total 500.00", "left": 0, "top": 40, "width": 90, "height": 20},
        ])

        assert [f.fragment_id for f in document.fragments] == ["a1", "f1"]
        assert document.fragments[0].text == "Invoice No: 7"
        assert document.fragments[1].bounding_box == BoundingBox(0, 40, 90, 60)
        assert document.document_type is DocumentType.INVOICE

    def test_object_with_document_type(self, loader):
        document = loader.parse({
            "document_type": "Receipt",
            "fragments": [{"fragmentId": 9, "text": "Thanks", "boundingBox": [0, 0, 1, 1]}],
        })
        assert document.document_type is DocumentType.RECEIPT
        assert document.fragments[0].fragment_id == "9"

    def test_records_without_text_are_skipped(self, loader):
        document = loader.parse([{"text": ""}, {"text": "   "}, {"bbox": [0, 0, 1, 1]}, {"text": "ok"}])
        assert [f.text for f in document.fragments] == ["ok"]
        assert document.fragments[0].fragment_id == "f3"

    def test_missing_geometry_is_kept(self, loader):
        document = loader.parse([{"text": "no box"}])
        assert document.fragments[0].bounding_box is None

    def test_unknown_document_type(self, loader):
        with pytest.raises(FragmentFormatError):
            loader.parse({"document_type": "purchase_order", "fragments": []})

    @pytest.mark.parametrize("payload", ["text", 42, {"pages": []}, [["not", "a", "record"]]])
    def test_unrecognised_shapes(self, loader, payload):
        with pytest.raises(FragmentFormatError):
            loader.parse(payload)

    def test_tesseract_columns(self, loader):
        document = loader.parse({
            "level": [1, 5, 5, 5],
            "text": ["", "Invoice", "  ", "No:"],
            "left": [0, 10, 60, 80],
            "top": [0, 5, 5, 5],
            "width": [500, 60, 10, 30],
            "height": [800, 20, 20, 20],
        })
        assert [(f.fragment_id, f.text) for f in document.fragments] == [("w0", "Invoice"), ("w1", "No:")]
        assert document.fragments[1].bounding_box == BoundingBox(80, 5, 110, 25)


def test_tesseract_zero_size_boxes_are_skipped():
    fragments = fragments_from_tesseract_data({
        "text": ["ghost", "real"],
        "left": [0, 0],
        "top": [0, 0],
        "width": [0, 5],
        "height": [10, 10],
    })
    assert [f.text for f in fragments] == ["real"]


class TestFiles:

    def test_load(self, loader, tmp_path):
        path = write_json(tmp_path / "scan.json", [{"text": "Hello", "bbox": [0, 0, 1, 1]}])
        fragments = loader.load(path)
        assert len(fragments) == 1

    def test_load_document_keeps_name(self, loader, tmp_path):
        path = write_json(tmp_path / "scan.json", [{"text": "Hello"}])
        document = loader.load_document(path)
        assert document.filename == "scan.json"
        assert document.success

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(InputError):
            loader.load(tmp_path / "missing.json")

    def test_unsupported_extension(self, loader, tmp_path):
        path = tmp_path / "scan.png"
        path.write_bytes(b"\x89PNG")
        with pytest.raises(UnsupportedFileTypeError) as excinfo:
            loader.load(path)
        assert excinfo.value.details["file_type"] == ".png"

    def test_invalid_json(self, loader, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(FragmentFormatError):
            loader.load(path)

    def test_undecodable_bytes(self, loader, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe[]")
        with pytest.raises(FragmentFormatError):
            loader.load(path)

    def test_custom_extension(self, tmp_path):
        path = write_json(tmp_path / "scan.ocr", [{"text": "Hello"}])
        assert len(FragmentLoader(supported_extensions=[".OCR"]).load(path)) == 1

    def test_load_batch_reports_failures(self, loader, tmp_path):
        write_json(tmp_path / "a.json", [{"text": "first"}])
        (tmp_path / "b.json").write_text("not json", encoding="utf-8")
        (tmp_path / "c.json").write_bytes(b"\xff\xfe\x00")
        write_json(tmp_path / "d.json", [{"text": "last"}])
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

        documents = loader.load_batch(tmp_path)

        assert [d.filename for d in documents] == ["a.json", "b.json", "c.json", "d.json"]
        assert [d.success for d in documents] == [True, False, False, True]
        assert documents[2].error
        assert documents[3].fragments[0].text == "last"

    def test_load_batch_requires_directory(self, loader, tmp_path):
        with pytest.raises(InputError):
            loader.load_batch(tmp_path / "nowhere")
