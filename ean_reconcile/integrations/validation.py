# ean_reconcile/integrations/validation.py

"""
Candidate label discovery for the status column.

Labels normally come from the column's list validation, e.g.
"Recieved - KING01042,Missing - Need to request,Recieved - KING01058".
When no usable validation exists, the distinct values already present in
the column stand in.
"""

import re
from typing import Optional

from ean_reconcile.models import DataValidation, RunLog
from ean_reconcile.core.normalizers import strip_quotes
from ean_reconcile.exceptions import EmptyCandidateLabelsError
from ean_reconcile.integrations.sheet import (
    CellGrid,
    column_letter_to_number,
    read_column_values,
)
from ean_reconcile.config import get_settings

settings = get_settings()

_CELL_REF = re.compile(r"\$?([A-Za-z]{1,3})\$?\d*")


def parse_list_formula(formula: Optional[str]) -> list[str]:
    """Split a comma-separated list source into clean labels, keeping order."""
    if not formula:
        return []

    labels = []
    for item in formula.split(","):
        label = strip_quotes(item)
        if label:
            labels.append(label)
    return labels


def range_covers_column(reference: str, column: str) -> bool:
    """True when a range like "G3:G500", "$G:$G", "F2:H9" or "G7" spans the column."""
    target = column_letter_to_number(column)
    parts = [p for p in reference.strip().split(":") if p]
    letters = []

    for part in parts:
        match = _CELL_REF.fullmatch(part.strip())
        if match is None:
            return False
        letters.append(column_letter_to_number(match.group(1)))

    if not letters:
        return False
    return min(letters) <= target <= max(letters)


def applies_to_column(validation: DataValidation, column: str) -> bool:
    """Check the rule's ranges; a space-separated range list counts as several."""
    for ranges in validation.ranges:
        for reference in ranges.split():
            if range_covers_column(reference, column):
                return True
    return False


def labels_from_validations(
    validations: list[DataValidation],
    column: Optional[str] = None,
) -> list[str]:
    """
    Labels from the first list validation usable for the column.

    A rule qualifies when it covers the column, or when its formula is a
    literal comma list. Range formulas ("Lists!A1:A3") are never list
    sources here.
    """
    if column is None:
        column = settings.dropdown_column

    for validation in validations:
        if validation.type != "list" or not validation.formula:
            continue

        formula = validation.formula
        if ":" in formula:
            continue

        if applies_to_column(validation, column) or "," in formula:
            labels = parse_list_formula(formula)
            if labels:
                return labels

    return []


def labels_from_values(
    grid: CellGrid,
    column: Optional[str] = None,
    scan_limit: int = None,
) -> list[str]:
    """Distinct (case-insensitive) non-blank values in the column, sorted."""
    if column is None:
        column = settings.dropdown_column
    if scan_limit is None:
        scan_limit = settings.label_scan_limit

    unique: dict[str, str] = {}
    for row, value in read_column_values(grid, column, start_row=1).items():
        if row > scan_limit:
            break
        unique.setdefault(value.casefold(), value)

    return sorted(unique.values(), key=str.casefold)


def discover_candidate_labels(
    validations: Optional[list[DataValidation]],
    grid: Optional[CellGrid] = None,
    column: Optional[str] = None,
    log: Optional[RunLog] = None,
    scan_limit: int = None,
) -> list[str]:
    """
    Find the candidate labels for the status column.

    Raises EmptyCandidateLabelsError when neither the validations nor the
    column values yield anything.
    """
    if column is None:
        column = settings.dropdown_column
    log = log if log is not None else RunLog()

    labels = labels_from_validations(validations or [], column)
    if labels:
        log.info(f"Found {len(labels)} label options: {', '.join(labels)}")
        return labels

    log.warning(f"No label options found in the validation list for column {column}.")

    if grid is not None:
        log.warning(f"Reading unique values from column {column} as label options...")
        labels = labels_from_values(grid, column, scan_limit)
        if labels:
            log.warning(f"Using {len(labels)} unique values from column {column} as label options: {', '.join(labels)}")
            return labels

    message = (
        f"No label options found for column {column}. "
        f"Add a list validation to the column, or fill in some values that can serve as options."
    )
    log.error(message)
    raise EmptyCandidateLabelsError(message)
