"""
Rule-based total amount extractor.

Scans recognized receipt text for monetary figures written in either common
European convention (``1.299,95`` / ``1 299.95`` / ``129,95``) and picks the
largest plausible value as the purchase total.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

MIN_AMOUNT = Decimal("0")
MAX_AMOUNT = Decimal("100000")

# Grouped thousands first so "1.299,95" is not split into "1.29" + "9,95"
_AMOUNT_RE = re.compile(
    r"\d{1,3}(?:[. ]\d{3})+(?:[.,]\d{2})?(?!\d)"
    r"|\d+(?:[.,]\d{2})?(?!\d)"
)
_FRACTION_RE = re.compile(r"[.,](\d{2})$")
# Leading number of a free-form field, e.g. "45,00 kr"; no exponents
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:[.,]\d+)?|[.,]\d+)(?![\d.,eE])")


def _normalize_token(token: str) -> Decimal | None:
    """Turn a matched token into a Decimal, or None if it cannot be parsed."""
    fraction = ""
    m = _FRACTION_RE.search(token)
    if m:
        fraction = m.group(1)
        token = token[: m.start()]
    digits = token.replace(".", "").replace(" ", "")
    if not digits:
        return None
    try:
        value = Decimal(f"{digits}.{fraction}" if fraction else digits)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _in_range(value: Decimal) -> bool:
    return MIN_AMOUNT < value < MAX_AMOUNT


def find_amount_candidates(text: str) -> list[Decimal]:
    """All plausible amounts in *text*, in order of appearance."""
    candidates: list[Decimal] = []
    for m in _AMOUNT_RE.finditer(text or ""):
        value = _normalize_token(m.group(0))
        if value is not None and _in_range(value):
            candidates.append(value)
    return candidates


def extract_amount(text: str) -> Decimal | None:
    """Return the largest plausible amount in *text*.

    The grand total is assumed to be the largest figure on the receipt.
    Subtotals printed before a discount break that assumption; the caller
    is expected to let the user correct the value.
    """
    candidates = find_amount_candidates(text)
    return max(candidates) if candidates else None


def parse_amount(value: str | None) -> Decimal | None:
    """Parse a user-supplied amount field.

    Accepts a single monetary token in either convention ("1.299,95"), or
    a leading plain number with a dot or comma decimal ("45,00 kr").
    Exponent notation is rejected.
    """
    value = (value or "").strip()
    if not value:
        return None
    if _AMOUNT_RE.fullmatch(value):
        return _normalize_token(value)
    m = _LEADING_NUMBER_RE.match(value)
    if not m:
        return None
    try:
        parsed = Decimal(m.group(0).replace(",", "."))
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None
