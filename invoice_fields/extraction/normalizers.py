"""
Data Normalizers Module.

This module provides normalization for matched field values:
    - Date strings (month names, two-digit years, separators)
    - Amount tokens (currency symbols, thousands separators)
    - Free text (names, address blocks)

Author: ML Engineering Team
"""

import re
from datetime import date
from typing import Optional

from dateutil import parser as date_parser

from invoice_fields.utils.helpers import collapse_whitespace
from invoice_fields.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class DateNormalizer:
    """
    Normalizes invoice date strings to a ``d/mm/yyyy`` style.

    Month names become two-digit numbers, two-digit years are expanded
    with a 50-year pivot (``< 50`` → 2000s, otherwise 1900s) and every
    separator becomes ``/``.

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.normalize("30-Oct-25")
        "30/10/2025"
        >>> normalizer.normalize("05.03.99")
        "05/03/1999"
    """

    MONTHS = {
        'jan': '01', 'feb': '02', 'mar': '03', 'apr': '04',
        'may': '05', 'jun': '06', 'jul': '07', 'aug': '08',
        'sep': '09', 'oct': '10', 'nov': '11', 'dec': '12',
    }

    YEAR_PIVOT = 50

    MONTH_NAME = re.compile(
        r'(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?',
        re.IGNORECASE
    )
    SHORT_YEAR = re.compile(r'^(\d{1,2}[-/.]\d{1,2}[-/.])(\d{2})$')

    def __init__(self, dayfirst: bool = True) -> None:
        self.dayfirst = dayfirst

    def normalize(self, date_str: str) -> str:
        """
        Normalize a matched date string.

        Args:
            date_str: Raw date text such as "30-Oct-25" or "20/08/2025".

        Returns:
            Normalized date text. Unrecognized shapes are returned with
            separators normalized only.
        """
        normalized = date_str.strip()

        normalized = self.MONTH_NAME.sub(
            lambda m: self.MONTHS[m.group(1).lower()], normalized, count=1
        )

        match = self.SHORT_YEAR.match(normalized)
        if match:
            year = int(match.group(2))
            century = "20" if year < self.YEAR_PIVOT else "19"
            normalized = f"{match.group(1)}{century}{match.group(2)}"

        return re.sub(r'[-.]', '/', normalized)

    def to_date(self, normalized: str) -> Optional[date]:
        """
        Parse a normalized date into a calendar date.

        Returns:
            The date, or None if the text is not a real date.
        """
        if not normalized:
            return None
        try:
            return date_parser.parse(normalized, dayfirst=self.dayfirst).date()
        except (ValueError, OverflowError) as e:
            logger.debug(f"Could not parse date '{normalized}': {e}")
            return None


class AmountNormalizer:
    """
    Normalizes amount tokens to plain decimal strings.

    Example:
        >>> AmountNormalizer().normalize("₹ 17,759.00")
        "17759.00"
    """

    CURRENCY_SYMBOLS = ['₹', 'Rs.', 'Rs', 'INR', '$', '€', '£']

    def normalize(self, amount_str: str) -> str:
        value = amount_str.strip()
        for symbol in self.CURRENCY_SYMBOLS:
            value = value.replace(symbol, '')
        return value.replace(',', '').strip()

    def to_float(self, amount_str: Optional[str]) -> Optional[float]:
        if not amount_str:
            return None
        try:
            return float(self.normalize(amount_str))
        except ValueError:
            return None


def clean_name(name: str) -> str:
    """Trim a matched name and squeeze internal whitespace."""
    return collapse_whitespace(name)


def clean_address(address: str) -> str:
    """Collapse an address window onto one line."""
    return collapse_whitespace(address)
