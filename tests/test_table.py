"""Tests for the table boundary detector."""

from conftest import layout
from invoice_fields.extraction import TableBounds, find_table_bounds
from invoice_fields.layout import group_into_rows


def rows_of(lines):
    return group_into_rows(layout(lines))


def test_strict_header_and_total_row():
    rows = rows_of([
        ["A.P. Communication"],
        ["Sl No.", "Description of Goods", "HSN/SAC", "Quantity", "Rate", "Amount"],
        ["1", "Redmi Note 13 8gb 128gb", "1.00 PCS", "12,000.00"],
        ["2", "Vivo Y28 4gb 128gb", "1.00 PCS", "11,000.00"],
        ["Total", "23,000.00"],
        ["Thank you"],
    ])
    assert find_table_bounds(rows) == TableBounds(2, 4)


def test_loose_header():
    rows = rows_of([
        ["Description", "Quantity", "Rate", "Amount"],
        ["Realme C55 6gb 128gb", "1", "10,999"],
        ["Sub-total", "10,999.00"],
    ])
    assert find_table_bounds(rows) == TableBounds(1, 2)


def test_gst_row_ends_table():
    rows = rows_of([
        ["Sl", "Description", "HSN", "Qty"],
        ["1", "Poco X6 8gb 256gb"],
        ["CGST @ 9%", "1,000.00"],
        ["SGST @ 9%", "1,000.00"],
    ])
    assert find_table_bounds(rows) == TableBounds(1, 2)


def test_total_before_any_header_does_not_end_table():
    rows = rows_of([
        ["Total Pages: 1"],
        ["Description", "Quantity", "Rate", "Amount"],
        ["Nokia G42 6gb 128gb"],
    ])
    assert find_table_bounds(rows) == TableBounds(2, 3)


def test_no_header_scans_everything():
    rows = rows_of([["Redmi 12 4gb 128gb"], ["Total 9,999.00"]])
    assert find_table_bounds(rows) == TableBounds(0, 2)


def test_empty_rows():
    assert find_table_bounds([]) == TableBounds(0, 0)


def test_header_as_last_row_gives_empty_table():
    rows = rows_of([["Intro line"], ["Description", "Quantity", "Rate", "Amount"]])
    bounds = find_table_bounds(rows)
    assert bounds == TableBounds(2, 2)
    assert len(bounds) == 0


def test_bounds_are_always_contained():
    samples = [
        [["Total"]],
        [["Description Quantity Rate Amount"], ["Total"]],
        [["x"], ["Sl No Description HSN Quantity"], ["Grand Total"], ["Description Quantity Rate Amount"]],
    ]
    for lines in samples:
        rows = rows_of(lines)
        start, end = find_table_bounds(rows)
        assert 0 <= start <= end <= len(rows)
