# ean_reconcile/core/comparison.py

"""
Comparison of two status columns.

Typically a manually filled sheet against a generated one. Values are
compared after trimming, peeling off stray quotes and ignoring case.
"""

from typing import Mapping, Optional

from ean_reconcile.models import ComparisonResult, RowComparison, RunLog
from ean_reconcile.core.normalizers import normalize_label
from ean_reconcile.config import get_settings

settings = get_settings()


def compare(
    side1: Mapping[int, str],
    side2: Mapping[int, str],
) -> ComparisonResult:
    """
    Compare two row -> value mappings.

    Every row present on either side is visited in ascending order. Rows
    present on one side only are recorded with None on the other side.
    """
    result = ComparisonResult()
    all_rows = sorted(set(side1) | set(side2))
    result.total_rows_compared = len(all_rows)

    for row in all_rows:
        if row not in side1:
            result.missing_in_side1 += 1
            result.mismatches.append(RowComparison(row=row, side1_value=None, side2_value=side2[row]))
            continue

        if row not in side2:
            result.missing_in_side2 += 1
            result.mismatches.append(RowComparison(row=row, side1_value=side1[row], side2_value=None))
            continue

        value1 = side1[row]
        value2 = side2[row]

        if normalize_label(value1) == normalize_label(value2):
            result.matching_rows += 1
        else:
            result.mismatching_rows += 1
            result.mismatches.append(RowComparison(row=row, side1_value=value1, side2_value=value2))

    return result


def compare_columns(
    grid1,
    grid2,
    column: Optional[str] = None,
    start_row: Optional[int] = None,
) -> ComparisonResult:
    """Read the same column from two sheets and compare them."""
    from ean_reconcile.integrations.sheet import read_column_values

    if column is None:
        column = settings.comparison_column
    if start_row is None:
        start_row = settings.comparison_start_row

    return compare(
        read_column_values(grid1, column, start_row),
        read_column_values(grid2, column, start_row),
    )


def log_comparison(
    result: ComparisonResult,
    log: RunLog,
    limit: int = None,
) -> None:
    """Write a comparison report into the run log."""
    if limit is None:
        limit = settings.mismatch_report_limit

    log.info("=== Comparison Results ===")
    log.info(f"Total rows compared: {result.total_rows_compared}")
    log.info(f"Matching rows: {result.matching_rows}")
    log.info(f"Mismatching rows: {result.mismatching_rows}")
    log.info(f"Missing in side 1: {result.missing_in_side1}")
    log.info(f"Missing in side 2: {result.missing_in_side2}")

    if result.is_identical:
        log.info("Files are identical: all values match")
        return

    log.warning(f"Files differ: found {len(result.mismatches)} differences")
    for mismatch in result.mismatches[:limit]:
        value1 = _display(mismatch.side1_value)
        value2 = _display(mismatch.side2_value)
        log.info(f"  Row {mismatch.row}: side1='{value1}' | side2='{value2}'")

    if len(result.mismatches) > limit:
        log.info(f"  ... and {len(result.mismatches) - limit} more mismatches")


def _display(value: Optional[str]) -> str:
    return "(missing)" if value is None else value
