# ean_reconcile/exceptions.py

"""
Errors that abort a reconciliation run.

Invalid cells are never errors; they are skipped while reading.
"""


class ReconciliationError(Exception):
    """Base class for fatal reconciliation failures."""


class ConfigurationError(ReconciliationError):
    """Settings disagree with what the main sheet offers."""


class UnresolvedMappingError(ReconciliationError):
    """Reference sources could not be tied to labels, or no fallback label is left."""

    def __init__(self, message: str, unmapped: list[str] | None = None):
        super().__init__(message)
        self.unmapped = unmapped or []


class NoIdentifiersFoundError(ReconciliationError):
    """The main sheet produced no valid identifiers."""


class EmptyCandidateLabelsError(ReconciliationError):
    """No candidate labels could be discovered for the status column."""
