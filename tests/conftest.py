"""
Shared fixtures: build positioned fragments from compact line layouts.
"""

from typing import List, Optional, Sequence

import pytest

from invoice_fields.extraction.settings import ExtractionSettings
from invoice_fields.layout.fragment import BoundingBox, TextFragment

LINE_HEIGHT = 40
CELL_WIDTH = 200


def frag(
    text: str,
    left: float = 0,
    top: float = 0,
    width: float = 150,
    height: float = 20,
    fragment_id: Optional[str] = None
) -> TextFragment:
    return TextFragment(
        text=text,
        bounding_box=BoundingBox(left, top, left + width, top + height),
        fragment_id=fragment_id or f"{text[:8]}@{left},{top}",
    )


def layout(lines: Sequence[Sequence[str]]) -> List[TextFragment]:
    """
    One fragment per cell; line ``i`` sits at ``top = i * 40``, cell
    ``j`` at ``left = j * 200``. Ids are ``f0, f1, ...`` in reading order.
    """
    fragments = []
    for i, cells in enumerate(lines):
        for j, text in enumerate(cells):
            fragments.append(frag(
                text,
                left=j * CELL_WIDTH,
                top=i * LINE_HEIGHT,
                fragment_id=f"f{len(fragments)}",
            ))
    return fragments


SAMPLE_INVOICE_LINES = [
    ["TAX INVOICE"],
    ["A.P. Communication (2024-25)"],
    ["Main Road, Hajipur, Vaishali, Bihar 844101"],
    ["GSTIN/UIN: 10ABCDE1234F1Z5", "Mob No: 9876543210"],
    ["Invoice No: INV/2024/0451", "Dated: 30-Oct-25"],
    ["Buyer: Ram Traders"],
    ["Sl No.", "Description of Goods", "HSN/SAC", "Quantity", "Rate", "Amount"],
    ["1", "Redmi Note 13 Pro 5g Phantom Purple 8gb 256gb", "1.00 PCS", "17,759.00", "17,759.00"],
    ["IMEI: 490154203237518"],
    ["2", "Samsung Galaxy A15 Blue 6gb 128gb", "1.00 PCS", "12,499.00", "12,499.00"],
    ["356938035643809"],
    ["CGST 2,727.00"],
    ["Total", "30,258.00"],
    ["Terms and conditions apply. Thank you for your business."],
]


@pytest.fixture
def settings() -> ExtractionSettings:
    return ExtractionSettings()


@pytest.fixture
def invoice_fragments() -> List[TextFragment]:
    return layout(SAMPLE_INVOICE_LINES)
