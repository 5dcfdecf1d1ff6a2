"""
Device Identifier Checksum Module.

Validates 15-digit device identifiers (IMEI numbers) printed on
invoices. A candidate passes when it is exactly fifteen digits, is not a
degenerate run (all one digit, or mostly ascending steps, which is what
OCR produces from test patterns and serial rulers) and its Luhn sum is a
multiple of ten.

Author: ML Engineering Team
"""

import re
from typing import List, Optional

IDENTIFIER_LENGTH = 15

# Fraction of ascending neighbour pairs above which a candidate is a sequence
SEQUENTIAL_STEP_LIMIT = 0.6

IDENTIFIER_IN_TEXT = re.compile(r'(?<!\d)(\d{15})(?!\d)')


def clean_identifier(text: str) -> str:
    """
    Strip separators from an identifier.

    Example:
        >>> clean_identifier("490154-203237-518")
        "490154203237518"
    """
    return re.sub(r'[^0-9]', '', text or '')


def format_identifier(identifier: str) -> str:
    """
    Render an identifier as NNNNNN-NNNNNN-NNN for display.

    Values that are not fifteen digits after cleaning are returned as given.
    """
    digits = clean_identifier(identifier)
    if len(digits) != IDENTIFIER_LENGTH:
        return identifier
    return f"{digits[:6]}-{digits[6:12]}-{digits[12:]}"


def _sequential_steps(digits: str) -> int:
    steps = 0
    for current, following in zip(digits, digits[1:]):
        a, b = int(current), int(following)
        if b == a + 1 or (a == 9 and b == 0):
            steps += 1
    return steps


def is_degenerate(candidate: str) -> bool:
    """True for all-same-digit candidates and mostly ascending runs."""
    if len(set(candidate)) == 1:
        return True
    return _sequential_steps(candidate) > len(candidate) * SEQUENTIAL_STEP_LIMIT


def luhn_checksum_ok(digits: str) -> bool:
    """
    Luhn check: double every second digit from the right, reduce doubled
    values above nine, and require the total to be divisible by ten.
    """
    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit = (digit % 10) + 1
        total += digit
    return total % 10 == 0


def identifier_error(candidate: Optional[str]) -> Optional[str]:
    """
    Explain why a candidate is not a valid device identifier.

    Returns:
        A short reason, or None when the candidate is valid.

    Example:
        >>> identifier_error("490154203237510")
        "Invalid checksum"
        >>> identifier_error("490154203237518") is None
        True
    """
    if not candidate:
        return "Identifier is empty"
    if len(candidate) != IDENTIFIER_LENGTH:
        return "Identifier must be exactly 15 digits"
    if not candidate.isascii() or not candidate.isdigit():
        return "Identifier must contain only digits"
    if is_degenerate(candidate):
        return "Identifier is a repeated or sequential pattern"
    if not luhn_checksum_ok(candidate):
        return "Invalid checksum"
    return None


def validate_identifier(candidate: Optional[str]) -> bool:
    """
    Validate a 15-digit device identifier candidate.

    Pure function of its input; never raises.

    Example:
        >>> validate_identifier("490154203237518")
        True
        >>> validate_identifier("111111111111111")
        False
    """
    return identifier_error(candidate) is None


def find_identifiers(text: str) -> List[str]:
    """Every standalone 15-digit token in the text, in order."""
    return IDENTIFIER_IN_TEXT.findall(text or '')
