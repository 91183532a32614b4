# ean_reconcile/integrations/sheet.py

"""
Cell-grid input for spreadsheet sources.

The workbook loader lives outside this package; it hands over anything
that satisfies CellGrid. InMemoryGrid covers callers that already hold
the cell values.
"""

import logging
from numbers import Number
from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from ean_reconcile.core.normalizers import (
    normalize_ean,
    is_valid_ean,
    render_numeric,
)
from ean_reconcile.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


@runtime_checkable
class CellGrid(Protocol):
    """Read access to one worksheet. Rows and columns are 1-based."""

    def has_value(self, row: int, column: int) -> bool: ...

    def get_value(self, row: int, column: int) -> Any: ...

    def get_text(self, row: int, column: int) -> str: ...

    def is_numeric(self, row: int, column: int) -> bool: ...

    def last_used_row(self) -> int: ...


class InMemoryGrid:
    """A worksheet held as a {(row, column): value} dict."""

    def __init__(self, cells: Optional[dict[tuple[int, int], Any]] = None):
        self._cells: dict[tuple[int, int], Any] = {}
        for (row, column), value in (cells or {}).items():
            self.set(row, column, value)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]], first_row: int = 1) -> "InMemoryGrid":
        """Build from row lists; None and empty strings are left empty."""
        grid = cls()
        for row_offset, values in enumerate(rows):
            for column_offset, value in enumerate(values):
                grid.set(first_row + row_offset, column_offset + 1, value)
        return grid

    @classmethod
    def from_column(
        cls,
        values: Iterable[Any],
        column: str | int = "C",
        first_row: int = 1,
    ) -> "InMemoryGrid":
        """Build a grid with a single populated column."""
        column_number = column if isinstance(column, int) else column_letter_to_number(column)
        grid = cls()
        for offset, value in enumerate(values):
            grid.set(first_row + offset, column_number, value)
        return grid

    def set(self, row: int, column: int, value: Any) -> None:
        if value is None or value == "":
            self._cells.pop((row, column), None)
        else:
            self._cells[(row, column)] = value

    def has_value(self, row: int, column: int) -> bool:
        return (row, column) in self._cells

    def get_value(self, row: int, column: int) -> Any:
        return self._cells.get((row, column))

    def get_text(self, row: int, column: int) -> str:
        value = self._cells.get((row, column))
        if value is None:
            return ""
        if self.is_numeric(row, column):
            return render_numeric(value)
        return str(value)

    def is_numeric(self, row: int, column: int) -> bool:
        value = self._cells.get((row, column))
        return isinstance(value, Number) and not isinstance(value, bool)

    def last_used_row(self) -> int:
        if not self._cells:
            return 0
        return max(row for row, _ in self._cells)


# ============================================
# Column letters
# ============================================

def column_letter_to_number(letter: str | None) -> int:
    """"A" -> 1, "G" -> 7, "AB" -> 28. Blank means column 1."""
    if not letter or not letter.strip():
        return 1

    result = 0
    for char in letter.strip().upper():
        if not "A" <= char <= "Z":
            raise ValueError(f"Invalid column letter: {letter!r}")
        result = result * 26 + (ord(char) - ord("A") + 1)
    return result


def column_number_to_letter(number: int) -> str:
    """1 -> "A", 28 -> "AB"."""
    result = ""
    while number > 0:
        number -= 1
        result = chr(ord("A") + number % 26) + result
        number //= 26
    return result


def _column_number(column: str | int) -> int:
    return column if isinstance(column, int) else column_letter_to_number(column)


# ============================================
# Readers
# ============================================

def cell_text(grid: CellGrid, row: int, column: int) -> str:
    """Cell value as text; numeric cells rendered without exponent or decimals."""
    if grid.is_numeric(row, column):
        return render_numeric(grid.get_value(row, column))
    return grid.get_text(row, column)


def read_main_identifiers(
    grid: CellGrid,
    column: str | int = None,
    start_row: int = None,
    min_digits: int = None,
    max_digits: int = None,
    allow_non_numeric: bool = None,
) -> dict[int, str]:
    """
    Read identifiers from the main sheet.

    Returns row -> normalized identifier for every valid cell from start_row
    to the last used row. Invalid cells are skipped.
    """
    if column is None:
        column = settings.ean_column
    if start_row is None:
        start_row = settings.start_row

    return dict(_iter_identifiers(grid, column, start_row, min_digits, max_digits, allow_non_numeric))


def read_reference_identifiers(
    grid: CellGrid,
    column: str | int = None,
    start_row: int = None,
    min_digits: int = None,
    max_digits: int = None,
    allow_non_numeric: bool = None,
) -> set[str]:
    """Read the set of identifiers present in a reference sheet."""
    if column is None:
        column = settings.ean_column
    if start_row is None:
        start_row = settings.reference_start_row

    return {
        ean
        for _, ean in _iter_identifiers(grid, column, start_row, min_digits, max_digits, allow_non_numeric)
    }


def read_column_values(
    grid: CellGrid,
    column: str | int,
    start_row: int = 1,
) -> dict[int, str]:
    """Trimmed, non-blank raw values of a column, keyed by row."""
    column_number = _column_number(column)
    values: dict[int, str] = {}

    for row in range(start_row, grid.last_used_row() + 1):
        if not grid.has_value(row, column_number):
            continue
        value = cell_text(grid, row, column_number)
        if value and value.strip():
            values[row] = value.strip()

    return values


def sample_column(
    grid: CellGrid,
    column: str | int,
    start_row: int,
    last_row: int = 10,
) -> list[tuple[int, str, str]]:
    """Raw (row, text, type) triples for diagnosing an empty read."""
    column_number = _column_number(column)
    end = min(last_row, grid.last_used_row())
    samples = []

    for row in range(start_row, end + 1):
        if grid.has_value(row, column_number):
            kind = "number" if grid.is_numeric(row, column_number) else "text"
            samples.append((row, grid.get_text(row, column_number), kind))

    return samples


def _iter_identifiers(
    grid: CellGrid,
    column: str | int,
    start_row: int,
    min_digits: Optional[int],
    max_digits: Optional[int],
    allow_non_numeric: Optional[bool],
):
    column_number = _column_number(column)
    last_row = grid.last_used_row()
    skipped = 0

    for row in range(start_row, last_row + 1):
        if not grid.has_value(row, column_number):
            continue

        ean = normalize_ean(cell_text(grid, row, column_number))
        if ean and is_valid_ean(ean, min_digits, max_digits, allow_non_numeric):
            yield row, ean
        else:
            skipped += 1

    if skipped:
        logger.debug(f"Skipped {skipped} non-identifier cells in column {column}")
