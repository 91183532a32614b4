# ean_reconcile/models/__init__.py

from ean_reconcile.models.identifier import (
    EanInfo,
    DocumentReadResult,
)
from ean_reconcile.models.reference import (
    ReferenceSet,
    ReferenceSource,
    SourceKind,
    DataValidation,
)
from ean_reconcile.models.result import (
    MappingResult,
    RunSummary,
    RowComparison,
    ComparisonResult,
)
from ean_reconcile.models.events import (
    EventLevel,
    RunEvent,
    RunLog,
)

__all__ = [
    # Identifier
    "EanInfo",
    "DocumentReadResult",
    # Reference
    "ReferenceSet",
    "ReferenceSource",
    "SourceKind",
    "DataValidation",
    # Result
    "MappingResult",
    "RunSummary",
    "RowComparison",
    "ComparisonResult",
    # Events
    "EventLevel",
    "RunEvent",
    "RunLog",
]
