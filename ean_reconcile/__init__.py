# ean_reconcile/__init__.py

"""
Reconciles a sheet of product identifiers against prioritized reference
sources and labels each row with the source that confirms it.
"""

from ean_reconcile.core.reconcile import reconcile, compare_sheets, ReconciliationResult
from ean_reconcile.models import ReferenceSource, DataValidation, RunLog
from ean_reconcile.integrations.sheet import InMemoryGrid
from ean_reconcile.exceptions import (
    ReconciliationError,
    ConfigurationError,
    UnresolvedMappingError,
    NoIdentifiersFoundError,
    EmptyCandidateLabelsError,
)

__all__ = [
    "reconcile",
    "compare_sheets",
    "ReconciliationResult",
    "ReferenceSource",
    "DataValidation",
    "RunLog",
    "InMemoryGrid",
    "ReconciliationError",
    "ConfigurationError",
    "UnresolvedMappingError",
    "NoIdentifiersFoundError",
    "EmptyCandidateLabelsError",
]
