"""
Text Fragment Data Classes.

This module defines the positioned text structures the engine consumes,
providing a standardized format for OCR text and bounding boxes.

Classes:
    BoundingBox: Axis-aligned box as (left, top, right, bottom)
    TextFragment: One OCR-recognized text span with its box
    Row: Fragments judged to share a visual line

Author: ML Engineering Team
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned bounding box in pixel (or page unit) coordinates.

    Example:
        >>> box = BoundingBox(100, 50, 200, 80)
        >>> box.width
        100
    """
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        """Width of bounding box."""
        return self.right - self.left

    @property
    def height(self) -> float:
        """Height of bounding box."""
        return self.bottom - self.top

    @property
    def is_consistent(self) -> bool:
        """True when the edges are ordered (left <= right, top <= bottom)."""
        return self.left <= self.right and self.top <= self.bottom

    @classmethod
    def union(cls, boxes: Iterable['BoundingBox']) -> Optional['BoundingBox']:
        """
        Smallest box enclosing every given box.

        Returns:
            The enclosing box, or None when no boxes are given.
        """
        boxes = [box for box in boxes if box is not None]
        if not boxes:
            return None

        return cls(
            left=min(b.left for b in boxes),
            top=min(b.top for b in boxes),
            right=max(b.right for b in boxes),
            bottom=max(b.bottom for b in boxes),
        )

    def to_list(self) -> list:
        return [self.left, self.top, self.right, self.bottom]


@dataclass(frozen=True)
class TextFragment:
    """
    Represents a single text span recognized by the OCR collaborator.

    Attributes:
        text: The recognized text content
        bounding_box: Box of the span, or None when OCR gave no geometry
        fragment_id: Stable identifier used for traceability

    Example:
        >>> fragment = TextFragment(
        ...     text="Invoice No: INV/2024/0451",
        ...     bounding_box=BoundingBox(100, 50, 400, 80),
        ...     fragment_id="f1"
        ... )
    """
    text: str
    bounding_box: Optional[BoundingBox]
    fragment_id: str

    @property
    def top(self) -> float:
        """Top coordinate."""
        return self.bounding_box.top

    @property
    def left(self) -> float:
        """Left coordinate."""
        return self.bounding_box.left

    @property
    def has_geometry(self) -> bool:
        """True when the fragment carries a usable bounding box."""
        return self.bounding_box is not None and self.bounding_box.is_consistent

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            'text': self.text,
            'bounding_box': self.bounding_box.to_list() if self.bounding_box else None,
            'fragment_id': self.fragment_id,
        }

    def __repr__(self) -> str:
        return f"TextFragment('{self.text}', id={self.fragment_id})"


@dataclass(frozen=True)
class Row:
    """
    Fragments judged to lie on the same visual line, left to right.

    Rows are built by the layout grouper and never modified afterwards.

    Example:
        >>> row.text
        "Redmi Note 13 Pro 5g 8gb 256gb 1.00 PCS 17,759.00"
    """
    fragments: Tuple[TextFragment, ...]

    @property
    def text(self) -> str:
        """Joined text of the row, fragments separated by a space."""
        return ' '.join(fragment.text for fragment in self.fragments)

    @property
    def fragment_ids(self) -> Tuple[str, ...]:
        return tuple(fragment.fragment_id for fragment in self.fragments)

    @property
    def bounding_box(self) -> Optional[BoundingBox]:
        """Box enclosing every fragment of the row."""
        return BoundingBox.union(fragment.bounding_box for fragment in self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self):
        return iter(self.fragments)

    def __repr__(self) -> str:
        return f"Row('{self.text}')"
