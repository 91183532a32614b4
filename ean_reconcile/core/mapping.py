# ean_reconcile/core/mapping.py

"""
Category mapping for reference sources.

Reference files are not configured with a label; their names are matched
against the candidate labels offered by the main sheet's status column.
Three passes are tried, each over all still-unmapped sources before the
next pass starts:

1. Exact (case-insensitive) equality
2. Containment in either direction
3. Shared letter+digit tokens (e.g. "KING01042")

A label claimed by one source is never offered to another.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Optional

from ean_reconcile.models import MappingResult
from ean_reconcile.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Letters followed by digits, e.g. "KING01058"
_LETTER_DIGIT = re.compile(r"[A-Za-z]{1,10}\d{1,10}")
# Either order, unbounded
_MIXED = re.compile(r"[A-Za-z]+\d+|\d+[A-Za-z]+")
MIN_TOKEN_LENGTH = 3


def source_name_from_path(path: str | Path) -> str:
    """File name without directory or extension."""
    return Path(path).stem


def extract_tokens(text: str | None) -> set[str]:
    """
    Pull code-like tokens out of a name or label.

    Tokens are upper-cased so sets from different strings can be intersected
    directly.
    """
    tokens: set[str] = set()
    if not text or not text.strip():
        return tokens

    for pattern in (_LETTER_DIGIT, _MIXED):
        for match in pattern.finditer(text):
            if len(match.group()) >= MIN_TOKEN_LENGTH:
                tokens.add(match.group().upper())

    return tokens


def map_sources_to_labels(
    source_names: list[str],
    candidate_labels: list[str],
    manual_mappings: Optional[dict[str, str]] = None,
    auto_map: bool = None,
) -> dict[str, str]:
    """
    Map each source name to one candidate label.

    Manual mappings always win and claim their label first. A manual label
    that is not a candidate, or that an earlier manual mapping already
    claimed, is skipped. Sources that match nothing are absent from the
    returned dict.
    """
    if auto_map is None:
        auto_map = settings.auto_map_sources

    mappings: dict[str, str] = {}
    claimed: set[str] = set()

    for name, label in (manual_mappings or {}).items():
        if name not in source_names:
            continue
        if label not in candidate_labels or label in claimed:
            logger.warning(f"Ignoring manual mapping '{name}' -> '{label}'")
            continue
        mappings[name] = label
        claimed.add(label)

    if not auto_map:
        return mappings

    passes: list[tuple[str, Callable[[str, str], bool]]] = [
        ("exact", _exact_match),
        ("containment", _containment_match),
        ("token", _token_match),
    ]

    for pass_name, matches in passes:
        for name in source_names:
            if name in mappings:
                continue

            for label in candidate_labels:
                if label in claimed:
                    continue
                if matches(name, label):
                    mappings[name] = label
                    claimed.add(label)
                    logger.debug(f"Mapped '{name}' to '{label}' ({pass_name} pass)")
                    break

    return mappings


def resolve_mapping(
    source_names: list[str],
    candidate_labels: list[str],
    manual_mappings: Optional[dict[str, str]] = None,
    no_match_label: Optional[str] = None,
    auto_map: bool = None,
) -> MappingResult:
    """
    Map sources to labels and settle on the no-match label.

    The no-match label is the configured one when given, otherwise the first
    candidate no source claimed. Sources left unmapped are reported but do
    not invalidate the result on their own; bad manual mappings do.
    """
    if no_match_label is None:
        no_match_label = settings.no_match_label

    result = MappingResult()
    result.errors.extend(check_manual_mappings(source_names, candidate_labels, manual_mappings))
    result.mappings = map_sources_to_labels(
        source_names,
        candidate_labels,
        manual_mappings=manual_mappings,
        auto_map=auto_map,
    )

    for name in source_names:
        if name not in result.mappings:
            result.unmapped.append(name)

    claimed = set(result.mappings.values())

    if no_match_label is not None:
        if no_match_label in claimed:
            result.errors.append(
                f"No-match label '{no_match_label}' is also mapped to a reference source."
            )
            return result
        if no_match_label not in candidate_labels:
            result.errors.append(
                f"No-match label '{no_match_label}' is not one of the candidate labels."
            )
            return result
        result.no_match_label = no_match_label
        return result

    remaining = [label for label in candidate_labels if label not in claimed]
    if not remaining:
        result.errors.append("Could not identify the no-match label: every candidate label is mapped.")
        return result

    result.no_match_label = remaining[0]
    return result


def check_manual_mappings(
    source_names: list[str],
    candidate_labels: list[str],
    manual_mappings: Optional[dict[str, str]] = None,
) -> list[str]:
    """Errors for manual labels outside the candidates or claimed twice."""
    errors = []
    owners: dict[str, str] = {}

    for name, label in (manual_mappings or {}).items():
        if name not in source_names:
            continue
        if label not in candidate_labels:
            errors.append(f"Manual mapping for '{name}' uses unknown label '{label}'.")
        elif label in owners:
            errors.append(f"Label '{label}' is manually mapped to both '{owners[label]}' and '{name}'.")
        else:
            owners[label] = name

    return errors


def _exact_match(name: str, label: str) -> bool:
    return name.casefold() == label.casefold()


def _containment_match(name: str, label: str) -> bool:
    name_folded = name.casefold()
    label_folded = label.casefold()
    if not name_folded or not label_folded:
        return False
    return name_folded in label_folded or label_folded in name_folded


def _token_match(name: str, label: str) -> bool:
    name_tokens = extract_tokens(name)
    if not name_tokens:
        return False
    return bool(name_tokens & extract_tokens(label))
