"""End-to-end tests for the field extraction entry point."""

import json

from conftest import frag, layout
from invoice_fields import DocumentType, FieldMap, extract_fields
from invoice_fields.extraction import ExtractionSettings, FieldExtractor
from invoice_fields.extraction.orchestrator import join_text

HEADER_KEYS = ["invoice_number", "invoice_date", "gst_number", "vendor_name", "customer_name"]


def test_empty_input_gives_empty_map():
    field_map = extract_fields([], DocumentType.INVOICE)
    assert isinstance(field_map, FieldMap)
    assert len(field_map) == 0
    assert field_map.average_confidence == 0.0


def test_sample_invoice_values(invoice_fragments, settings):
    field_map = extract_fields(invoice_fragments, DocumentType.INVOICE, settings)

    assert field_map.value("invoice_number") == "INV/2024/0451"
    assert field_map.value("invoice_date") == "30/10/2025"
    assert field_map.value("gst_number") == "10ABCDE1234F1Z5"
    assert field_map.value("vendor_name") == "A.P. Communication"
    assert field_map.value("customer_name") == "Ram Traders"
    assert field_map.value("vendor_phone") == "9876543210"
    assert field_map.value("product_1_description") == "Redmi Note 13 Pro 5g Phantom Purple 8gb 256gb"
    assert field_map.value("product_1_imei") == "490154203237518"
    assert field_map.value("product_2_rate") == "12499.00"
    assert field_map.value("product_2_imei") == "356938035643809"
    assert field_map.value("total_amount") == "30258.00"
    assert field_map.value("tax_amount") == "2727.00"
    assert "Bihar 844101" in field_map.value("vendor_address")
    assert "buyer_address" not in field_map


def test_keys_follow_extraction_order(invoice_fragments, settings):
    keys = list(extract_fields(invoice_fragments, DocumentType.INVOICE, settings))

    assert keys[:len(HEADER_KEYS)] == HEADER_KEYS
    assert keys[len(HEADER_KEYS)] == "vendor_phone"
    assert keys.index("product_1_description") < keys.index("product_2_description")
    assert keys.index("product_2_imei") < keys.index("total_amount")
    assert keys[-1] == "vendor_address"


def test_receipt_uses_invoice_extractors(invoice_fragments, settings):
    invoice = extract_fields(invoice_fragments, DocumentType.INVOICE, settings)
    receipt = extract_fields(invoice_fragments, DocumentType.RECEIPT, settings)
    assert list(invoice) == list(receipt)


def test_other_documents_only_get_phone_numbers(invoice_fragments, settings):
    field_map = extract_fields(invoice_fragments, DocumentType.OTHER, settings)
    assert list(field_map) == ["phone_1"]
    assert field_map.value("phone_1") == "9876543210"
    assert field_map["phone_1"].source_fragment_ids == ("f4",)


def test_values_are_traced_to_input_fragments(invoice_fragments, settings):
    input_ids = {fragment.fragment_id for fragment in invoice_fragments}
    field_map = extract_fields(invoice_fragments, DocumentType.INVOICE, settings)

    for key, extracted in field_map.items():
        assert set(extracted.source_fragment_ids) <= input_ids, key
        assert 0.0 <= extracted.confidence <= 1.0
        assert extracted.validation.passed


def test_unrecognised_content_yields_nothing(settings):
    fragments = [frag("hello"), frag("world", top=40)]
    assert len(extract_fields(fragments, DocumentType.INVOICE, settings)) == 0


def test_earliest_invoice_number_is_kept():
    fragments = layout([
        ["Invoice No: A-100"],
        ["Invoice No: B-200"],
    ])
    field_map = extract_fields(fragments, DocumentType.INVOICE, ExtractionSettings())
    assert field_map.value("invoice_number") == "A-100"


def test_same_input_same_output(invoice_fragments, settings):
    extractor = FieldExtractor(settings)
    first = extractor.extract_fields(invoice_fragments)
    second = extractor.extract_fields(invoice_fragments)
    assert first.to_dict() == second.to_dict()


def test_field_map_serializes_to_json(invoice_fragments, settings):
    payload = json.loads(extract_fields(invoice_fragments, settings=settings).to_json())

    number = payload["invoice_number"]
    assert number["field_type"] == "invoice_number"
    assert number["processed_value"] == "INV/2024/0451"
    assert number["source_fragment_ids"] == ["f5"]
    assert number["validation"] == {
        "method": "pattern_matching",
        "passed": True,
        "confidence": 0.95,
    }
    assert len(number["bounding_box"]) == 4


def test_join_text():
    assert join_text([frag("a"), frag("b")]) == "a\nb"


def test_taxable_value_column_is_not_tax(settings):
    fragments = layout([
        ["Sl No.", "Description", "HSN/SAC", "Quantity", "Rate", "Taxable Value"],
        ["1", "Redmi Note 13 Pro 5g 8gb 256gb", "1.00 PCS", "17,759.00", "17,759.00"],
        ["CGST", "2,727.00"],
        ["Total", "20,486.00"],
    ])
    field_map = extract_fields(fragments, DocumentType.INVOICE, settings)
    assert field_map.value("tax_amount") == "2727.00"
    assert field_map.value("total_amount") == "20486.00"


def test_tax_invoice_heading_does_not_take_a_date(settings):
    fragments = layout([
        ["TAX INVOICE"],
        ["Invoice No: INV/2024/0451"],
        ["Dated: 30.10.2025"],
        ["Total 17,759.00"],
    ])
    field_map = extract_fields(fragments, DocumentType.INVOICE, settings)
    assert "tax_amount" not in field_map
