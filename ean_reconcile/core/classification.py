# ean_reconcile/core/classification.py

"""
Row classification against prioritized reference sets.

Each main-sheet row gets the label of the first reference set (by priority)
that contains its identifier, or the no-match label.
"""

from typing import Iterable, Mapping

from ean_reconcile.models import ReferenceSet, RunSummary
from ean_reconcile.core.normalizers import identifier_key


def build_reference_set(
    identifiers: Iterable[str],
    label: str,
    priority: int = 0,
    name: str | None = None,
) -> ReferenceSet:
    """Freeze a source's identifiers into a ReferenceSet."""
    return ReferenceSet(
        label=label,
        priority=priority,
        members=frozenset(identifier_key(i) for i in identifiers),
        name=name,
    )


def order_by_priority(reference_sets: Iterable[ReferenceSet]) -> list[ReferenceSet]:
    """Lowest priority value first; ties keep their given order."""
    return sorted(reference_sets, key=lambda r: r.priority)


def classify(
    main_identifiers: Mapping[int, str],
    reference_sets: list[ReferenceSet],
    fallback_label: str,
) -> dict[int, str]:
    """
    Assign a label to every row of the main sheet.

    Returns a new row -> label dict covering exactly the rows given.
    """
    ordered = order_by_priority(reference_sets)
    assignments: dict[int, str] = {}

    for row, ean in main_identifiers.items():
        key = identifier_key(ean)
        label = fallback_label

        for reference in ordered:
            if key in reference.members:
                label = reference.label
                break

        assignments[row] = label

    return assignments


def summarize(
    assignments: Mapping[int, str],
    reference_sets: list[ReferenceSet],
    fallback_label: str,
) -> RunSummary:
    """Count rows per reference label (priority order) and rows left unmatched."""
    per_label = {r.label: 0 for r in order_by_priority(reference_sets)}
    no_matches = 0

    for label in assignments.values():
        if label in per_label:
            per_label[label] += 1
        else:
            no_matches += 1

    return RunSummary(
        total_eans_processed=len(assignments),
        matches_per_label=per_label,
        no_matches=no_matches,
    )
