# ean_reconcile/integrations/document.py

"""
Paged document input (slide decks and similar).

The loader flattens each page into text fragments: table cells first, then
loose text runs. Identifiers are pulled from every fragment with the
free-text extractor.
"""

import logging
from typing import Optional

from ean_reconcile.models import DocumentReadResult, EanInfo
from ean_reconcile.core.extraction import extract_eans
from ean_reconcile.core.normalizers import identifier_key

logger = logging.getLogger(__name__)


def select_pages(page_count: int, selected_pages: Optional[list[int]] = None) -> list[int]:
    """
    Resolve the 1-based pages to read.

    No selection means every page. Out-of-range numbers are dropped and
    duplicates collapse.
    """
    if not selected_pages:
        return list(range(1, page_count + 1))

    return sorted({p for p in selected_pages if 1 <= p <= page_count})


def read_document(
    pages: list[list[str]],
    selected_pages: Optional[list[int]] = None,
    min_digits: int = None,
    max_digits: int = None,
    allow_non_numeric: bool = None,
) -> DocumentReadResult:
    """
    Extract identifiers from the selected pages of a document.

    Returns the unique identifiers plus per-page counts and contexts.
    """
    result = DocumentReadResult()
    seen: set[str] = set()

    for page_number in select_pages(len(pages), selected_pages):
        page_infos: list[EanInfo] = []
        page_seen: set[str] = set()

        for fragment in pages[page_number - 1]:
            for info in extract_eans(fragment, min_digits, max_digits, allow_non_numeric):
                key = identifier_key(info.ean)
                if key in page_seen:
                    continue
                page_seen.add(key)
                page_infos.append(info)

                if key not in seen:
                    seen.add(key)
                    result.eans.add(info.ean)

        result.eans_per_page[page_number] = page_infos
        result.counts_per_page[page_number] = len(page_infos)

    logger.debug(f"Read {len(result.eans)} identifiers from {len(result.counts_per_page)} pages")
    return result
