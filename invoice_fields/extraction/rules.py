"""
Pattern Rule Registry.

Each header field owns an ordered list of match rules. Rules are tried
in order against the full document text and the first one that matches
anywhere wins; later rules are never consulted for that field.

Author: ML Engineering Team
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Pattern, Tuple

from .field_result import FieldType
from .normalizers import DateNormalizer, clean_name

GSTIN = r'[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]'
BUSINESS_SUFFIX = r'(?:Communications?|Electronics?|Traders|Shop|Mobiles?|Enterprises)'


@dataclass(frozen=True)
class MatchRule:
    """
    One labelled extraction pattern.

    Attributes:
        name: Short label used in logs
        pattern: Compiled pattern; group 1 captures the value
        confidence: Fixed confidence assigned when this rule fires
    """
    name: str
    pattern: Pattern
    confidence: float

    def search(self, text: str) -> Optional[str]:
        """Captured value of the first match, or None."""
        match = self.pattern.search(text)
        if match is None:
            return None
        return match.group(1)


def rule(name: str, pattern: str, confidence: float, flags: int = re.IGNORECASE) -> MatchRule:
    return MatchRule(name=name, pattern=re.compile(pattern, flags), confidence=confidence)


@dataclass(frozen=True)
class FieldRules:
    """
    Ordered rules for one field key plus its value post-processor.
    """
    field_type: FieldType
    rules: Tuple[MatchRule, ...]
    process: Callable[[str], str] = str.strip

    def first_match(self, text: str) -> Optional[Tuple[MatchRule, str]]:
        """
        Evaluate rules in order; stop at the first rule that matches.

        Returns:
            (rule, raw value) or None when no rule matches.
        """
        for match_rule in self.rules:
            value = match_rule.search(text)
            if value is not None and value.strip():
                return match_rule, value
        return None


_dates = DateNormalizer()

HEADER_RULES: Dict[str, FieldRules] = {
    'invoice_number': FieldRules(
        FieldType.INVOICE_NUMBER,
        (
            rule('labelled', r'(?:Invoice|Bill)\s*(?:No\.?|Number|#)\s*:?\s*([A-Z0-9/-]*\d[A-Z0-9/-]*)', 0.95),
            rule('series', r'(?:APCM|Invoice)\s*/\s*([0-9]+)', 0.95),
        ),
    ),
    'invoice_date': FieldRules(
        FieldType.INVOICE_DATE,
        (
            rule('dated_month_name', r'(?:Date|Dated)\s*:?\s*(\d{1,2}[-/]\w{3}[-/]\d{2,4})', 0.90),
            rule('ack_date', r'(?:Ack Date|Invoice Date)\s*:?\s*(\d{1,2}[-/]\w{3}[-/]\d{2,4})', 0.90),
            rule('dated_numeric', r'(?:Date|Dated)\s*:?\s*(\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4})(?!\d)', 0.90),
        ),
        process=_dates.normalize,
    ),
    'gst_number': FieldRules(
        FieldType.GST_NUMBER,
        (
            rule('gstin_uin', r'GSTIN\s*/\s*UIN\s*:?\s*(' + GSTIN + r')', 0.95),
            rule('gstin', r'GSTIN\s*(?:No\.?|Number)?\s*:?\s*(' + GSTIN + r')', 0.95),
        ),
    ),
    'vendor_name': FieldRules(
        FieldType.VENDOR_NAME,
        (
            rule('business_with_period', r'([A-Z][A-Za-z \t.&]+?' + BUSINESS_SUFFIX + r')\s*\(', 0.85),
            rule('business_line', r'^[ \t]*([A-Z][A-Za-z \t.&]+?' + BUSINESS_SUFFIX + r')[ \t]*$',
                 0.85, re.IGNORECASE | re.MULTILINE),
        ),
        process=clean_name,
    ),
    'vendor_phone': FieldRules(
        FieldType.PHONE_NUMBER,
        (
            rule('mob_no', r'Mob\s*No\s*[=:.]?\s*([0-9]{10})(?!\d)', 0.90),
            rule('contact', r'(?:Mobile|Phone|Contact)(?:\s*No\.?)?\s*:?\s*(?:\+91[\s-]?)?([0-9]{10})(?!\d)', 0.90),
        ),
    ),
    'customer_name': FieldRules(
        FieldType.CUSTOMER_NAME,
        (
            rule('buyer_label', r'(?:M/s\.?|Buyer(?:\s*\(Bill\s+to\))?|Bill\s+to)[:\s]+([A-Z][A-Za-z \t.]+?)(?:\s*\(|\n|\s*\bMob\b|$)', 0.85),
        ),
        process=clean_name,
    ),
}

IDENTIFICATION_KEYS = ('invoice_number', 'invoice_date', 'gst_number', 'vendor_name')
CONTACT_KEYS = ('vendor_phone',)
PARTY_KEYS = ('customer_name',)
