# ean_reconcile/core/__init__.py

from ean_reconcile.core.normalizers import (
    normalize_ean,
    is_valid_ean,
    render_numeric,
    identifier_key,
    strip_quotes,
)
from ean_reconcile.core.extraction import extract_eans
from ean_reconcile.core.mapping import (
    extract_tokens,
    map_sources_to_labels,
    resolve_mapping,
    source_name_from_path,
)
from ean_reconcile.core.classification import classify, build_reference_set
from ean_reconcile.core.comparison import compare

__all__ = [
    "normalize_ean",
    "is_valid_ean",
    "render_numeric",
    "identifier_key",
    "strip_quotes",
    "extract_eans",
    "extract_tokens",
    "map_sources_to_labels",
    "resolve_mapping",
    "source_name_from_path",
    "classify",
    "build_reference_set",
    "compare",
]
