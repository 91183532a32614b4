# ean_reconcile/core/extraction.py

"""
Identifier extraction from free text.

Document sources mix identifiers with narrative text ("EAN: 0123-4567-89012
see below"). Three passes run over each text block and their results are
merged:

1. Plain digit runs of an acceptable length
2. Looser runs of digits, spaces and hyphens, normalized afterwards
3. The whole text as a single candidate
"""

import re

from ean_reconcile.models import EanInfo
from ean_reconcile.core.normalizers import (
    normalize_ean,
    is_valid_ean,
    identifier_key,
)
from ean_reconcile.config import get_settings

settings = get_settings()


def extract_eans(
    text: str | None,
    min_digits: int = None,
    max_digits: int = None,
    allow_non_numeric: bool = None,
) -> list[EanInfo]:
    """
    Extract identifiers embedded in a block of text.

    Results are deduplicated case-insensitively and keep the order in which
    they were first found. Each carries the text block as context.
    """
    if min_digits is None:
        min_digits = settings.min_ean_digits
    if max_digits is None:
        max_digits = settings.max_ean_digits
    if allow_non_numeric is None:
        allow_non_numeric = settings.allow_non_numeric_eans

    if not text or not text.strip():
        return []

    context = text.strip()
    found: list[EanInfo] = []
    seen: set[str] = set()

    def accept(candidate: str) -> None:
        if not is_valid_ean(candidate, min_digits, max_digits, allow_non_numeric):
            return
        key = identifier_key(candidate)
        if key in seen:
            return
        seen.add(key)
        found.append(EanInfo(ean=candidate, text_context=context))

    # ============================================
    # Pass 1: bare digit runs
    # ============================================
    for match in _digit_pattern(min_digits, max_digits).finditer(context):
        accept(match.group())

    # ============================================
    # Pass 2: digits with spaces or hyphens inside
    # ============================================
    for match in _formatted_pattern(min_digits, max_digits).finditer(context):
        accept(normalize_ean(match.group()))

    # ============================================
    # Pass 3: the whole block is one identifier
    # ============================================
    accept(normalize_ean(context))

    return found


def extract_ean_values(text: str | None, **bounds) -> set[str]:
    """Identifier values found in a text block, without context."""
    return {info.ean for info in extract_eans(text, **bounds)}


def _digit_pattern(min_digits: int, max_digits: int) -> re.Pattern:
    return re.compile(rf"(?<!\d)\d{{{min_digits},{max_digits}}}(?!\d)")


def _formatted_pattern(min_digits: int, max_digits: int) -> re.Pattern:
    # Starts and ends on a digit so trailing separators never count
    return re.compile(rf"(?<!\d)\d[\d \-]{{{max(min_digits - 2, 0)},{max_digits + 8}}}\d(?!\d)")
