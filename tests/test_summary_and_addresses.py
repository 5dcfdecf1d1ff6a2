"""Tests for the financial summary and address extractors."""

from conftest import frag
from invoice_fields.extraction import (
    ExtractionSettings,
    FieldType,
    ValidationMethod,
    extract_addresses,
    extract_totals,
)


class TestTotals:

    def test_last_amount_is_total(self, settings):
        text = "Subtotal 15,050.00\nCGST 1,354.50\nSGST 1,354.50\nTotal 17,759.00"
        fields = extract_totals(text, settings=settings)

        total = fields["total_amount"]
        assert total.raw_value == "17,759.00"
        assert total.processed_value == "17759.00"
        assert total.confidence == 0.85
        assert total.validation.method is ValidationMethod.CONTEXT_BASED
        assert total.field_type is FieldType.TOTAL_AMOUNT

    def test_tax_follows_label(self, settings):
        text = "Subtotal 15,050.00\nCGST 1,354.50\nTotal 17,759.00"
        tax = extract_totals(text, settings=settings)["tax_amount"]
        assert tax.processed_value == "1354.50"
        assert tax.confidence == 0.80
        assert tax.validation.method is ValidationMethod.PATTERN_MATCHING

    def test_tax_label_does_not_read_next_line(self, settings):
        text = "TAX INVOICE\nInvoice No: INV/2024/0451\nDated: 30.10.2025\nTotal 17,759.00"
        fields = extract_totals(text, settings=settings)
        assert "tax_amount" not in fields
        assert fields["total_amount"].processed_value == "17759.00"

    def test_taxable_is_not_a_tax_label(self, settings):
        text = "Taxable Value 17,759.00\nCGST @ 9% 1,354.50"
        assert extract_totals(text, settings=settings)["tax_amount"].processed_value == "1354.50"

    def test_spaced_label(self, settings):
        fields = extract_totals("C Gst @9% 900.00\nTotal 10,900.00", settings=settings)
        assert fields["tax_amount"].processed_value == "900.00"

    def test_tax_amount_beyond_lookahead_is_ignored(self):
        text = "Tax" + " " * 30 + "450.00"
        assert "tax_amount" not in extract_totals(text, settings=ExtractionSettings(tax_lookahead_chars=10))
        assert "tax_amount" in extract_totals(text, settings=ExtractionSettings(tax_lookahead_chars=80))

    def test_single_digit_amount_is_not_a_total(self, settings):
        assert extract_totals("1.00 PCS", settings=settings) == {}

    def test_total_is_traced_to_fragment(self, settings):
        fragments = [frag("Total", 0, 500, fragment_id="a"), frag("30,258.00", 200, 500, fragment_id="b")]
        fields = extract_totals("Total\n30,258.00", fragments, settings)
        assert fields["total_amount"].source_fragment_ids == ("b",)
        assert fields["total_amount"].bounding_box == fragments[1].bounding_box

    def test_no_amounts(self, settings):
        assert extract_totals("Thank you", settings=settings) == {}


class TestAddresses:

    def test_place_in_first_half_is_vendor_address(self, settings):
        text = "A.P. Communication\nMain Road, Hajipur, Bihar 844101\n" + "x\n" * 60
        fields = extract_addresses(text, settings=settings)

        assert list(fields) == ["vendor_address"]
        address = fields["vendor_address"]
        assert address.field_type is FieldType.VENDOR_ADDRESS
        assert address.confidence == 0.75
        assert address.validation.method is ValidationMethod.CONTEXT_BASED
        assert "Hajipur, Bihar 844101" in address.processed_value
        assert "\n" not in address.processed_value

    def test_place_in_second_half_is_buyer_address(self, settings):
        text = "y\n" * 60 + "Buyer: Ram Traders, Gola Road, Patna, Bihar"
        fields = extract_addresses(text, settings=settings)

        assert list(fields) == ["buyer_address"]
        assert fields["buyer_address"].field_type is FieldType.BILLING_ADDRESS

    def test_only_one_address_per_document(self, settings):
        text = "Shop, Kolkata, West Bengal\n" + "z " * 100 + "\nBuyer, Patna, Bihar"
        fields = extract_addresses(text, settings=settings)
        assert len(fields) == 1
        # Bihar comes first in the gazetteer, so it anchors the block
        assert "buyer_address" in fields
        assert fields["buyer_address"].processed_value.endswith("Patna, Bihar")

    def test_window_size(self, settings):
        text = "a" * 299 + " Bihar " + "b" * 400
        address = extract_addresses(text, settings=settings)["vendor_address"]
        assert address.raw_value == "a" * 199 + " Bihar " + "b" * 49

    def test_place_inside_another_word_is_ignored(self, settings):
        assert extract_addresses("Our goal is customer delight\n" + "." * 100, settings=settings) == {}

    def test_multi_word_place_with_line_break(self, settings):
        text = "Shop 4, Anna Salai, Chennai, Tamil\nNadu 600002\n" + "-" * 200
        address = extract_addresses(text, settings=settings)["vendor_address"]
        assert "Chennai, Tamil Nadu 600002" in address.processed_value

    def test_custom_gazetteer(self):
        settings = ExtractionSettings(gazetteer=("Kathmandu",))
        fields = extract_addresses("Durbar Marg, Kathmandu\n" + "-" * 200, settings=settings)
        assert "vendor_address" in fields

    def test_no_place_name(self, settings):
        assert extract_addresses("Main Road", settings=settings) == {}

    def test_sources_are_fragments_with_place_name(self, settings):
        fragments = [frag("Main Road, Hajipur", fragment_id="a"), frag("Vaishali, Bihar", top=40, fragment_id="b")]
        text = "\n".join(f.text for f in fragments) + "\n" + "." * 100
        fields = extract_addresses(text, fragments, settings)
        assert fields["vendor_address"].source_fragment_ids == ("b",)
