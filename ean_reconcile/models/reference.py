# ean_reconcile/models/reference.py

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field, field_validator


# ============================================
# Reference Sets
# ============================================

class ReferenceSet(BaseModel):
    """
    Identifiers from one reference source, tied to the label they confirm.

    Lower priority values are checked first. Members are stored as
    identifier keys (see core.normalizers.identifier_key).
    """

    label: str
    priority: int = 0
    members: frozenset[str] = Field(default_factory=frozenset)
    name: Optional[str] = None

    class Config:
        frozen = True

    @field_validator("members")
    @classmethod
    def validate_members(cls, v: frozenset[str]) -> frozenset[str]:
        """Store members upper-cased, matching identifier_key."""
        return frozenset(member.upper() for member in v)

    def __contains__(self, key: str) -> bool:
        return key.upper() in self.members

    def __len__(self) -> int:
        return len(self.members)


# ============================================
# Reference Source Inputs
# ============================================

SourceKind = Literal["sheet", "document"]


class ReferenceSource(BaseModel):
    """
    A reference input as handed over by the loading layer.

    Sheet sources carry a cell grid; document sources carry pages of text
    fragments. The name is usually the file name without extension and is
    what gets matched against the candidate labels.
    """

    name: str
    kind: SourceKind = "sheet"
    priority: int = 0

    # Sheet sources
    grid: Optional[Any] = None
    ean_column: Optional[str] = None  # None = Settings.ean_column
    start_row: Optional[int] = None

    # Document sources
    pages: list[list[str]] = Field(default_factory=list)
    selected_pages: list[int] = Field(default_factory=list)

    # Manual label override
    mapped_label: Optional[str] = None

    class Config:
        arbitrary_types_allowed = True


# ============================================
# Validation Lists
# ============================================

class DataValidation(BaseModel):
    """A data-validation rule from the main sheet."""

    type: str = "list"
    formula: Optional[str] = None
    ranges: list[str] = Field(default_factory=list, description="Cell ranges the rule applies to, e.g. G3:G500")
