"""
Helper Utilities Module.

Small generic helpers shared by the extraction, input and output
modules.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - generate_timestamp: Generate formatted timestamps
    - collapse_whitespace: Squeeze runs of whitespace into one space
    - parse_number: Parse an OCR numeric token into a float
    - phrase_pattern: Whole-word regex for a multi-word phrase
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/reports")
        PosixPath('outputs/reports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the lowercase file extension, including the dot.

    Example:
        >>> get_file_extension("fragments.JSON")
        ".json"
        >>> get_file_extension("noextension")
        ""
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Generate a formatted timestamp string.

    Example:
        >>> generate_timestamp("%Y-%m-%d")
        "2026-10-17"
    """
    return datetime.now().strftime(format_str)


def collapse_whitespace(text: str) -> str:
    """
    Replace every run of whitespace with a single space and trim.

    Example:
        >>> collapse_whitespace("  Main Road,\\n Patna  ")
        "Main Road, Patna"
    """
    return re.sub(r'\s+', ' ', text).strip()


def parse_number(token: str) -> Optional[float]:
    """
    Parse a numeric token that may carry thousands separators.

    Args:
        token: Text such as "17,759.00", "1,17,759" or "42".

    Returns:
        The numeric value, or None if the token is not a number.
    """
    try:
        return float(token.replace(',', ''))
    except (AttributeError, ValueError):
        return None


def phrase_pattern(phrase: str) -> str:
    """
    Regex source matching a phrase as whole words, with any run of
    whitespace between its words.

    Example:
        >>> re.search(phrase_pattern("Tamil Nadu"), "Chennai, Tamil\\nNadu") is not None
        True
    """
    return r'\b' + r'\s+'.join(re.escape(word) for word in phrase.split()) + r'\b'
