# ean_reconcile/models/identifier.py

from pydantic import BaseModel, Field


class EanInfo(BaseModel):
    """An identifier found in free text, with the text it came from."""

    ean: str
    text_context: str = ""


class DocumentReadResult(BaseModel):
    """Identifiers read from a paged document source."""

    eans: set[str] = Field(default_factory=set, description="Unique identifiers across all pages")
    counts_per_page: dict[int, int] = Field(default_factory=dict, description="1-based page -> identifier count")
    eans_per_page: dict[int, list[EanInfo]] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.eans)
