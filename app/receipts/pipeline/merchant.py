"""
Merchant name guesser.

Looks at the first few lines of recognized text, where the store name is
usually printed, and returns the first one that survives a small set of
line filters.
"""
from __future__ import annotations

import re
from typing import Callable

MAX_LINES = 6
MAX_LENGTH = 50

# Receipt jargon that opens a line but never names the store
BOILERPLATE_WORDS: tuple[str, ...] = (
    "receipt",
    "kvittering",
    "kvitto",
    "kassabon",
    "quittung",
    "beleg",
    "invoice",
    "faktura",
    "rechnung",
    "tax invoice",
    "vat",
    "moms",
    "mva",
    "mwst",
    "cvr",
    "org nr",
    "org. nr",
    "orgnr",
    "order",
    "ordre",
    "order no",
    "bestilling",
    "transaction",
)

_BOILERPLATE_RE = re.compile(
    r"^\s*(?:"
    + "|".join(re.escape(w).replace(r"\ ", r"\s*") for w in sorted(BOILERPLATE_WORDS, key=len, reverse=True))
    + r")\b[\s.:#-]*",
    re.IGNORECASE,
)
_DISALLOWED_CHARS = re.compile(r"[^\w\s.&'-]|_")
_WHITESPACE = re.compile(r"\s+")
_LETTER = re.compile(r"[^\W\d_]")
_DIGIT = re.compile(r"\d")
_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")


def _clean(line: str) -> str:
    line = _DISALLOWED_CHARS.sub("", line)
    return _WHITESPACE.sub(" ", line).strip()


# ---------------------------------------------------------------------------
# Line filters (True = keep)
# ---------------------------------------------------------------------------

def is_not_empty(line: str) -> bool:
    return bool(line)


def is_not_boilerplate(line: str) -> bool:
    return _BOILERPLATE_RE.match(line) is None


def has_letters(line: str) -> bool:
    return _LETTER.search(line) is not None


def is_not_address_or_date(line: str) -> bool:
    """Digits next to a comma or a 4-digit year read as an address/date line.

    Also rejects names like "7-Eleven, Main St"; known limitation.
    """
    if not _DIGIT.search(line):
        return True
    return "," not in line and _YEAR.search(line) is None


# Run on the cleaned line
LINE_FILTERS: list[Callable[[str], bool]] = [
    is_not_empty,
    is_not_boilerplate,
    has_letters,
]

# Run on the raw line; cleaning drops the commas these rely on
RAW_LINE_FILTERS: list[Callable[[str], bool]] = [
    is_not_address_or_date,
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def strip_boilerplate(line: str) -> str:
    return _BOILERPLATE_RE.sub("", line, count=1).strip()


def guess_merchant(text: str) -> str:
    """Return a best-guess merchant name from *text* (may be empty)."""
    lines = [l.strip() for l in (text or "").splitlines() if l.strip()]

    for raw in lines[:MAX_LINES]:
        cleaned = _clean(raw)
        if all(check(cleaned) for check in LINE_FILTERS) and all(
            check(raw) for check in RAW_LINE_FILTERS
        ):
            return cleaned[:MAX_LENGTH]

    if not lines:
        return ""
    return strip_boilerplate(lines[0])[:MAX_LENGTH].strip()
