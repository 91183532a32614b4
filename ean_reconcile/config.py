# ean_reconcile/config.py

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Processing settings loaded from environment variables."""

    # Main sheet
    ean_column: str = "C"
    status_column: str = "G"
    dropdown_column: str = "G"  # column carrying the label validation list
    start_row: int = 3
    worksheet_index: int = 1  # 1-based
    worksheet_name: Optional[str] = None  # takes precedence over the index

    # Reference sheets
    reference_start_row: int = 1

    # Identifier validation
    min_ean_digits: int = 14
    max_ean_digits: int = 14
    allow_non_numeric_eans: bool = False

    # Label mapping
    expected_label_count: Optional[int] = None  # None = any count
    strict_label_count: bool = False
    auto_map_sources: bool = True  # False = manual mappings only
    require_all_sources_mapped: bool = False
    no_match_label: Optional[str] = None
    label_scan_limit: int = 1000

    # Comparison
    comparison_column: str = "G"
    comparison_start_row: int = 3
    mismatch_report_limit: int = 20

    # Diagnostics
    sample_size: int = 5

    class Config:
        env_prefix = "EAN_"
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def worksheet(self) -> int | str:
        """Worksheet selector handed to the sheet reader: name if set, else index."""
        return self.worksheet_name or self.worksheet_index


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
