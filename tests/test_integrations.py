# tests/test_integrations.py

"""
Tests for sheet, document and validation-list inputs.
"""

import pytest

from ean_reconcile.exceptions import EmptyCandidateLabelsError
from ean_reconcile.integrations.sheet import (
    CellGrid,
    InMemoryGrid,
    cell_text,
    column_letter_to_number,
    column_number_to_letter,
    read_column_values,
    read_main_identifiers,
    read_reference_identifiers,
    sample_column,
)
from ean_reconcile.integrations.document import read_document, select_pages
from ean_reconcile.integrations.validation import (
    applies_to_column,
    discover_candidate_labels,
    labels_from_validations,
    labels_from_values,
    parse_list_formula,
    range_covers_column,
)
from ean_reconcile.models import DataValidation, RunLog


# ============================================
# Sheets
# ============================================

class TestColumnLetters:
    """Test column letter conversion."""

    def test_letter_to_number(self):
        assert column_letter_to_number("A") == 1
        assert column_letter_to_number("g") == 7
        assert column_letter_to_number("AB") == 28
        assert column_letter_to_number(" C ") == 3

    def test_blank_is_first_column(self):
        assert column_letter_to_number("") == 1
        assert column_letter_to_number(None) == 1

    def test_invalid_letter(self):
        with pytest.raises(ValueError):
            column_letter_to_number("G7")

    def test_number_to_letter(self):
        assert column_number_to_letter(1) == "A"
        assert column_number_to_letter(26) == "Z"
        assert column_number_to_letter(28) == "AB"


class TestInMemoryGrid:
    """Test the in-memory cell grid."""

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryGrid(), CellGrid)

    def test_from_rows(self):
        grid = InMemoryGrid.from_rows([["a", None, 3], ["", "b"]], first_row=2)

        assert grid.has_value(2, 1)
        assert not grid.has_value(2, 2)
        assert grid.get_value(2, 3) == 3
        assert not grid.has_value(3, 1)
        assert grid.get_text(3, 2) == "b"
        assert grid.last_used_row() == 3

    def test_numeric_cells(self):
        grid = InMemoryGrid({(1, 1): 12345678901234.0, (2, 1): "text", (3, 1): True})

        assert grid.is_numeric(1, 1)
        assert not grid.is_numeric(2, 1)
        assert not grid.is_numeric(3, 1)
        assert cell_text(grid, 1, 1) == "12345678901234"

    def test_empty_grid(self):
        assert InMemoryGrid().last_used_row() == 0


class TestSheetReaders:
    """Test reading identifiers out of a grid."""

    def test_main_identifiers_by_row(self):
        grid = InMemoryGrid.from_column(
            ["EAN", "", "12345678901234", 99999999999999.0, "Product name", "0012-3456-7890-12"],
            column="C",
        )

        eans = read_main_identifiers(grid, "C", 3, 14, 14, False)

        assert eans == {
            3: "12345678901234",
            4: "99999999999999",
            6: "00123456789012",
        }

    def test_start_row_respected(self):
        grid = InMemoryGrid.from_column(["12345678901234", "22222222222222"], column="C")

        assert read_main_identifiers(grid, "C", 2, 14, 14, False) == {2: "22222222222222"}

    def test_column_number_accepted(self):
        grid = InMemoryGrid.from_column(["12345678"], column=2)

        assert read_main_identifiers(grid, 2, 1, 8, 8, False) == {1: "12345678"}

    def test_reference_identifiers(self):
        grid = InMemoryGrid.from_column(
            ["Header", "12345678901234", "12345678901234", "KING01058", 123.0],
            column="C",
        )

        assert read_reference_identifiers(grid, "C", 1, 14, 14, False) == {"12345678901234"}
        assert read_reference_identifiers(grid, "C", 1, 8, 14, True) == {
            "12345678901234",
            "KING01058",
        }

    def test_column_values(self):
        grid = InMemoryGrid({(3, 7): "  Missing ", (4, 7): "", (5, 7): 7.0, (2, 7): "Header"})

        assert read_column_values(grid, "G", 3) == {3: "Missing", 5: "7"}

    def test_sample_column(self):
        grid = InMemoryGrid({(3, 3): "Widget", (4, 3): 42})

        assert sample_column(grid, "C", 3) == [(3, "Widget", "text"), (4, "42", "number")]


# ============================================
# Documents
# ============================================

class TestDocuments:
    """Test reading identifiers from paged documents."""

    PAGES = [
        ["Title slide"],
        ["EAN 12345678901234", "Alt: 1234-5678-9012-34"],
        ["12345678901234", "99999999999999"],
    ]

    def test_select_all_pages(self):
        assert select_pages(3) == [1, 2, 3]
        assert select_pages(3, []) == [1, 2, 3]

    def test_select_filters_and_sorts(self):
        assert select_pages(3, [3, 1, 3, 7, 0]) == [1, 3]

    def test_read_document(self):
        result = read_document(self.PAGES, None, 14, 14, False)

        assert result.eans == {"12345678901234", "99999999999999"}
        assert result.total == 2
        assert result.counts_per_page == {1: 0, 2: 1, 3: 2}
        assert result.eans_per_page[2][0].text_context == "EAN 12345678901234"

    def test_read_selected_pages(self):
        result = read_document(self.PAGES, [3], 14, 14, False)

        assert result.eans == {"12345678901234", "99999999999999"}
        assert list(result.counts_per_page) == [3]

    def test_empty_document(self):
        result = read_document([], None, 14, 14, False)

        assert result.total == 0
        assert result.counts_per_page == {}


# ============================================
# Validation Lists
# ============================================

class TestValidationLists:
    """Test candidate label discovery."""

    def test_parse_list_formula(self):
        formula = '"Recieved - KING01042,Missing - Need to request,Recieved - KING01058"'

        assert parse_list_formula(formula) == [
            "Recieved - KING01042",
            "Missing - Need to request",
            "Recieved - KING01058",
        ]

    def test_parse_drops_empty_items(self):
        assert parse_list_formula("A,, 'B' ,\"\"") == ["A", "B"]
        assert parse_list_formula(None) == []

    def test_range_covers_column(self):
        assert range_covers_column("G3:G500", "G")
        assert range_covers_column("$G:$G", "G")
        assert range_covers_column("F2:H9", "G")
        assert range_covers_column("G7", "G")
        assert not range_covers_column("AG3:AG9", "G")
        assert not range_covers_column("C3:C9", "G")

    def test_applies_to_space_separated_ranges(self):
        rule = DataValidation(formula="A,B", ranges=["C1:C5 G3:G9"])

        assert applies_to_column(rule, "G")

    def test_labels_from_covering_rule(self):
        rules = [
            DataValidation(formula="Yes", ranges=["C3:C9"]),
            DataValidation(formula="Found", ranges=["G3:G9"]),
        ]

        assert labels_from_validations(rules, "G") == ["Found"]

    def test_range_formula_is_not_a_list(self):
        rules = [DataValidation(formula="Lists!$A$1:$A$3", ranges=["G3:G9"])]

        assert labels_from_validations(rules, "G") == []

    def test_comma_list_used_without_matching_range(self):
        rules = [DataValidation(formula="A,B,C", ranges=["H1:H9"])]

        assert labels_from_validations(rules, "G") == ["A", "B", "C"]

    def test_non_list_rules_skipped(self):
        rules = [DataValidation(type="whole", formula="1,2", ranges=["G1:G9"])]

        assert labels_from_validations(rules, "G") == []

    def test_labels_from_values(self):
        grid = InMemoryGrid.from_column(["Status", None, "Missing", "found", "MISSING", "Found"], column="G")

        assert labels_from_values(grid, "G", 1000) == ["found", "Missing", "Status"]

    def test_labels_from_values_scan_limit(self):
        grid = InMemoryGrid.from_column(["A", "B", "C"], column="G")

        assert labels_from_values(grid, "G", 2) == ["A", "B"]

    def test_discover_prefers_validations(self):
        log = RunLog()
        grid = InMemoryGrid.from_column(["Other"], column="G")

        labels = discover_candidate_labels(
            [DataValidation(formula="A,B", ranges=["G3:G9"])],
            grid,
            "G",
            log=log,
        )

        assert labels == ["A", "B"]
        assert log.warnings == []

    def test_discover_falls_back_to_values(self):
        log = RunLog()
        grid = InMemoryGrid.from_column(["B", "A"], column="G")

        labels = discover_candidate_labels([], grid, "G", log=log)

        assert labels == ["A", "B"]
        assert len(log.warnings) >= 2

    def test_discover_writes_into_given_empty_log(self):
        """A fresh caller log receives the events instead of a private one."""
        log = RunLog()

        discover_candidate_labels([DataValidation(formula="A,B", ranges=["G3:G9"])], log=log)

        assert len(log) == 1
        assert "A, B" in log.events[0].message

    def test_discover_nothing_raises(self):
        log = RunLog()

        with pytest.raises(EmptyCandidateLabelsError):
            discover_candidate_labels([], InMemoryGrid(), "G", log=log)

        assert log.errors


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
