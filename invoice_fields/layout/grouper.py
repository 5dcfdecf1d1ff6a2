"""
Layout Grouper Module.

Clusters positioned text fragments into visual rows. Pure geometry: no
knowledge of invoices lives here.

Author: ML Engineering Team
"""

from functools import reduce
from typing import List, Sequence, Tuple

from invoice_fields.utils.exceptions import PreconditionError
from invoice_fields.utils.logger import get_logger
from .fragment import Row, TextFragment

logger = get_logger(__name__)

DEFAULT_ROW_TOLERANCE = 20


def _close_row(fragments: Sequence[TextFragment]) -> Row:
    return Row(tuple(sorted(fragments, key=lambda f: f.left)))


def group_into_rows(
    fragments: Sequence[TextFragment],
    tolerance: float = DEFAULT_ROW_TOLERANCE
) -> List[Row]:
    """
    Group fragments into rows by vertical proximity.

    Fragments are first ordered top-to-bottom (stable, so fragments that
    share a top keep the caller's order). A fragment joins the current
    row when its top is within ``tolerance`` of the previous fragment's
    top; otherwise it opens a new row. Each row is then ordered by
    ascending left edge.

    If any fragment lacks usable geometry the whole input is returned as
    a single row in the caller's order.

    Args:
        fragments: Fragments in any order.
        tolerance: Maximum top-edge distance between neighbours of a row.

    Returns:
        Rows in reading order (top-to-bottom, left-to-right).

    Raises:
        PreconditionError: If tolerance is not positive.

    Example:
        >>> rows = group_into_rows(fragments)
        >>> [row.text for row in rows]
        ["TAX INVOICE", "Invoice No: INV/2024/0451 Dated: 30-Oct-25"]
    """
    if tolerance <= 0:
        raise PreconditionError("tolerance", tolerance, "must be positive")

    if not fragments:
        return []

    if not all(fragment.has_geometry for fragment in fragments):
        logger.warning(
            f"{sum(1 for f in fragments if not f.has_geometry)} fragment(s) "
            f"without usable geometry; treating input as a single row"
        )
        return [Row(tuple(fragments))]

    ordered = sorted(fragments, key=lambda f: f.top)

    def step(acc: Tuple[Tuple[Row, ...], Tuple[TextFragment, ...]], fragment: TextFragment):
        rows, current = acc
        if abs(fragment.top - current[-1].top) <= tolerance:
            return rows, current + (fragment,)
        return rows + (_close_row(current),), (fragment,)

    rows, last = reduce(step, ordered[1:], ((), (ordered[0],)))
    rows = list(rows) + [_close_row(last)]

    logger.debug(f"Grouped {len(fragments)} fragments into {len(rows)} rows")
    return rows
