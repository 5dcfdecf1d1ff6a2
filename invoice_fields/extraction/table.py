"""
Table Boundary Detector.

Locates the line-item table among the grouped rows: the rows after a
column header and before the first totals/tax row.

Author: ML Engineering Team
"""

import re
from typing import NamedTuple, Sequence

from invoice_fields.layout.fragment import Row
from invoice_fields.utils.logger import get_logger

logger = get_logger(__name__)

STRICT_HEADER = re.compile(
    r'\b(?:Sl|SI|Sr|S\.?\s*No)\.?\b.*Description.*\b(?:HSN|SAC)\b.*\b(?:Quantity|Qty)\b',
    re.IGNORECASE
)
LOOSE_HEADER = re.compile(r'Description.*Quantity.*Rate.*Amount', re.IGNORECASE)
TABLE_END = re.compile(
    r'\b(?:Sub\s*-?\s*total|Grand\s+Total|Total|[CSI]\s*GST)\b',
    re.IGNORECASE
)


class TableBounds(NamedTuple):
    """Half-open row range ``[start, end)`` of the line-item table."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


def find_table_bounds(rows: Sequence[Row]) -> TableBounds:
    """
    Find the line-item table among the rows.

    A strict header (serial, description, HSN/SAC and quantity columns) is
    recognised on every row; the loose header (description, quantity,
    rate, amount) only before a table has started. The table begins
    right after the header and ends at the first total or GST row seen
    inside it.

    Args:
        rows: Rows in top-to-bottom order

    Returns:
        TableBounds with ``0 <= start <= end <= len(rows)``. Without any
        header the whole row list is the table.
    """
    start = -1
    end = len(rows)

    for index, row in enumerate(rows):
        text = row.text
        in_table = start >= 0

        if STRICT_HEADER.search(text) or (not in_table and LOOSE_HEADER.search(text)):
            start = index + 1
            continue

        if in_table and TABLE_END.search(text):
            end = index
            break

    if start < 0:
        logger.debug("No table header found, scanning all rows")
        return TableBounds(0, len(rows))

    bounds = TableBounds(start, max(start, end))
    logger.debug(f"Table rows {bounds.start}..{bounds.end}")
    return bounds
