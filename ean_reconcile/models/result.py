# ean_reconcile/models/result.py

from typing import Optional
from pydantic import BaseModel, Field


# ============================================
# Label Mapping
# ============================================

class MappingResult(BaseModel):
    """Outcome of tying reference sources to candidate labels."""

    mappings: dict[str, str] = Field(default_factory=dict, description="Source name -> label")
    no_match_label: Optional[str] = None
    unmapped: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.no_match_label is not None and not self.errors


# ============================================
# Run Summary
# ============================================

class RunSummary(BaseModel):
    """Counts for a completed classification run."""

    total_eans_processed: int = 0
    matches_per_label: dict[str, int] = Field(default_factory=dict)
    no_matches: int = 0
    duration_ms: int = 0
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


# ============================================
# Comparison
# ============================================

class RowComparison(BaseModel):
    """A row whose values differ. None means the row is absent on that side."""

    row: int
    side1_value: Optional[str] = None
    side2_value: Optional[str] = None


class ComparisonResult(BaseModel):
    """Row-by-row comparison of two status columns."""

    total_rows_compared: int = 0
    matching_rows: int = 0
    mismatching_rows: int = 0
    missing_in_side1: int = 0
    missing_in_side2: int = 0
    mismatches: list[RowComparison] = Field(default_factory=list)

    @property
    def is_identical(self) -> bool:
        return (
            self.mismatching_rows == 0
            and self.missing_in_side1 == 0
            and self.missing_in_side2 == 0
        )
