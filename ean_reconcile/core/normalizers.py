# ean_reconcile/core/normalizers.py

"""
Identifier normalization and validation.

Ensures the same identifier compares equal regardless of which source,
cell type or formatting it arrived with.
"""

from decimal import Decimal
from typing import Any
import re

from ean_reconcile.config import get_settings

settings = get_settings()

# Characters treated as formatting inside an identifier
_FORMATTING = re.compile(r"[-. ]")
_DIGITS = re.compile(r"[0-9]+")
_QUOTES = "\"'"


def strip_formatting(value: str) -> str:
    """Remove hyphens, literal spaces and periods from anywhere in the value."""
    return _FORMATTING.sub("", value)


def is_digits(value: str) -> bool:
    """True for a non-empty run of ASCII digits."""
    return bool(_DIGITS.fullmatch(value))


def render_numeric(value: Any) -> str:
    """
    Render a numeric cell value as an integer-looking string.

    Handles:
    - ints (rendered as-is)
    - floats (no scientific notation, trailing zeros and point removed)
    - Decimals
    """
    if isinstance(value, bool):
        return str(value)

    if isinstance(value, int):
        return str(value)

    if isinstance(value, float):
        # repr gives the shortest round-tripping form; Decimal expands exponents
        text = format(Decimal(repr(value)), "f")
    elif isinstance(value, Decimal):
        text = format(value, "f")
    else:
        return str(value)

    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def normalize_ean(raw: Any) -> str:
    """
    Normalize a raw cell value into a comparable identifier.

    - Trims surrounding whitespace
    - Digit strings lose their formatting characters (leading zeros kept)
    - Anything else keeps its internal punctuation and is only trimmed
    """
    if raw is None:
        return ""

    if not isinstance(raw, str):
        raw = render_numeric(raw)

    trimmed = raw.strip()
    if not trimmed:
        return ""

    cleaned = strip_formatting(trimmed)
    if is_digits(cleaned):
        return cleaned

    return trimmed


def is_valid_ean(
    value: str | None,
    min_digits: int = None,
    max_digits: int = None,
    allow_non_numeric: bool = None,
) -> bool:
    """
    Check whether a normalized value qualifies as an identifier.

    Digit strings must fall within [min_digits, max_digits] once formatting
    is removed. Other codes are accepted only when allow_non_numeric is set,
    and then only the lower bound applies.
    """
    if min_digits is None:
        min_digits = settings.min_ean_digits
    if max_digits is None:
        max_digits = settings.max_ean_digits
    if allow_non_numeric is None:
        allow_non_numeric = settings.allow_non_numeric_eans

    if not value or not value.strip():
        return False

    cleaned = strip_formatting(value.strip())
    if not cleaned:
        return False

    if is_digits(cleaned):
        return min_digits <= len(cleaned) <= max_digits

    return allow_non_numeric and len(cleaned) >= min_digits


def identifier_key(value: str) -> str:
    """Key used for set membership: case-insensitive for codes, exact for digits."""
    return value.upper()


def strip_quotes(value: str | None) -> str:
    """
    Trim a value and peel off any number of surrounding quote characters.

    Turns '"Recieved - KING01042' and "Recieved - KING01058''" into their
    bare labels.
    """
    if not value or not value.strip():
        return ""

    s = value.strip()
    s = s.lstrip(_QUOTES)
    s = s.rstrip(_QUOTES)
    return s.strip()


def normalize_label(value: str | None) -> str:
    """Normalize a label or status value for case-insensitive comparison."""
    return strip_quotes(value).casefold()
