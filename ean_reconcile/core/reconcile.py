# ean_reconcile/core/reconcile.py

"""
End-to-end reconciliation run.

Reads the main sheet, discovers the candidate labels, reads every
reference source, maps sources to labels and classifies each row:

1. Main identifiers (fatal if none)
2. Candidate labels (fatal if none)
3. Reference identifiers per source
4. Source -> label mapping and the no-match label
5. Priority classification and summary

Nothing is written back; the caller persists the row assignments.
"""

from datetime import datetime
from typing import Optional

from ean_reconcile.models import (
    ComparisonResult,
    DataValidation,
    DocumentReadResult,
    MappingResult,
    ReferenceSet,
    ReferenceSource,
    RunLog,
    RunSummary,
)
from ean_reconcile.core.classification import build_reference_set, classify, summarize
from ean_reconcile.core.comparison import compare_columns, log_comparison
from ean_reconcile.core.mapping import resolve_mapping
from ean_reconcile.integrations.sheet import (
    CellGrid,
    read_main_identifiers,
    read_reference_identifiers,
    sample_column,
)
from ean_reconcile.integrations.document import read_document
from ean_reconcile.integrations.validation import discover_candidate_labels
from ean_reconcile.exceptions import (
    ConfigurationError,
    EmptyCandidateLabelsError,
    NoIdentifiersFoundError,
    UnresolvedMappingError,
)
from ean_reconcile.config import Settings, get_settings


class ReconciliationResult:
    """Result of a reconciliation run."""

    def __init__(self):
        self.assignments: dict[int, str] = {}
        self.candidate_labels: list[str] = []
        self.mapping: Optional[MappingResult] = None
        self.reference_sets: list[ReferenceSet] = []
        self.documents: dict[str, DocumentReadResult] = {}
        self.summary: Optional[RunSummary] = None
        self.duration_ms: int = 0

    @property
    def no_match_label(self) -> Optional[str]:
        return self.mapping.no_match_label if self.mapping else None

    def rows_with_label(self, label: str) -> list[int]:
        return sorted(row for row, assigned in self.assignments.items() if assigned == label)

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for reporting."""
        return {
            "summary": self.summary.model_dump() if self.summary else None,
            "assignments": dict(self.assignments),
            "candidate_labels": list(self.candidate_labels),
            "mapping": self.mapping.model_dump() if self.mapping else None,
            "reference_sets": [
                {"name": r.name, "label": r.label, "priority": r.priority, "size": len(r.members)}
                for r in self.reference_sets
            ],
            "duration_ms": self.duration_ms,
        }


def reconcile(
    main_grid: CellGrid,
    references: list[ReferenceSource],
    validations: Optional[list[DataValidation]] = None,
    candidate_labels: Optional[list[str]] = None,
    manual_mappings: Optional[dict[str, str]] = None,
    config: Optional[Settings] = None,
    log: Optional[RunLog] = None,
) -> ReconciliationResult:
    """
    Classify every main-sheet row against the reference sources.

    candidate_labels skips label discovery when given. Manual mappings
    (source name -> label) add to the per-source mapped_label overrides.
    Fatal problems are logged as error events, then raised.
    """
    config = config or get_settings()
    log = log if log is not None else RunLog()
    start_time = datetime.now()
    first_event = len(log)
    result = ReconciliationResult()

    bounds = {
        "min_digits": config.min_ean_digits,
        "max_digits": config.max_ean_digits,
        "allow_non_numeric": config.allow_non_numeric_eans,
    }

    log.info("=== EAN Matching Process Started ===")

    # ============================================
    # Main identifiers
    # ============================================
    log.info(f"Reading identifiers from main sheet (column {config.ean_column}, starting at row {config.start_row})...")
    main_eans = read_main_identifiers(main_grid, config.ean_column, config.start_row, **bounds)
    log.info(f"Found {len(main_eans)} valid identifiers in main sheet.")

    if not main_eans:
        log.warning("No valid identifiers found. Sample of the configured column:")
        for row, text, kind in sample_column(main_grid, config.ean_column, config.start_row):
            log.warning(f"  Row {row}, Column {config.ean_column}: '{text}' (Type: {kind})")
        _fail(
            log,
            NoIdentifiersFoundError(
                f"No identifiers found in main sheet column {config.ean_column} "
                f"starting from row {config.start_row}."
            ),
        )

    # ============================================
    # Candidate labels
    # ============================================
    if candidate_labels is None:
        log.info(f"Reading label options for column {config.dropdown_column}...")
        candidate_labels = discover_candidate_labels(
            validations,
            main_grid,
            config.dropdown_column,
            log=log,
            scan_limit=config.label_scan_limit,
        )
    result.candidate_labels = list(candidate_labels)

    if not result.candidate_labels:
        _fail(log, EmptyCandidateLabelsError("No candidate labels were supplied."))

    expected = config.expected_label_count
    if expected is not None and expected != len(result.candidate_labels):
        message = f"Expected {expected} label options, but found {len(result.candidate_labels)}."
        if config.strict_label_count:
            _fail(log, ConfigurationError(message))
        log.warning(message)

    # ============================================
    # Reference identifiers
    # ============================================
    names = [source.name for source in references]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        _fail(log, ConfigurationError(f"Reference source names must be unique: {', '.join(duplicates)}"))

    identifiers_by_source: dict[str, set[str]] = {}
    for source in references:
        identifiers_by_source[source.name] = _read_source(source, config, bounds, result, log)

    # ============================================
    # Label mapping
    # ============================================
    log.info("Mapping reference sources to label options...")
    manual = {s.name: s.mapped_label for s in references if s.mapped_label}
    manual.update(manual_mappings or {})

    mapping = resolve_mapping(
        names,
        result.candidate_labels,
        manual_mappings=manual,
        no_match_label=config.no_match_label,
        auto_map=config.auto_map_sources,
    )
    result.mapping = mapping

    for name in mapping.unmapped:
        if config.require_all_sources_mapped:
            mapping.errors.append(f"Could not match reference source '{name}' to any label option.")
            continue
        log.warning(f"Could not match reference source '{name}' to any label option; its identifiers are ignored.")

    if not mapping.is_valid:
        _fail(
            log,
            UnresolvedMappingError(
                "Failed to map reference sources to label options:\n" + "\n".join(mapping.errors),
                unmapped=mapping.unmapped,
            ),
        )

    for name, label in mapping.mappings.items():
        log.info(f"Mapped '{name}' to: {label}")
    log.info(f"No-match option: {mapping.no_match_label}")

    result.reference_sets = [
        build_reference_set(
            identifiers_by_source[source.name],
            mapping.mappings[source.name],
            priority=source.priority,
            name=source.name,
        )
        for source in references
        if source.name in mapping.mappings
    ]

    _log_samples(log, main_eans, identifiers_by_source, config.sample_size)

    # ============================================
    # Classification
    # ============================================
    log.info("Matching identifiers...")
    result.assignments = classify(main_eans, result.reference_sets, mapping.no_match_label)

    summary = summarize(result.assignments, result.reference_sets, mapping.no_match_label)
    result.duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
    summary.duration_ms = result.duration_ms

    log.info("Processing complete:")
    log.info(f"  Total identifiers processed: {summary.total_eans_processed}")
    for label, count in summary.matches_per_label.items():
        log.info(f"  Matches for '{label}': {count}")
    log.info(f"  No matches: {summary.no_matches}")

    run_events = log.events[first_event:]
    summary.warnings = [e.message for e in run_events if e.level == "warning"]
    summary.errors = [e.message for e in run_events if e.level == "error"]
    result.summary = summary

    return result


def compare_sheets(
    grid1: CellGrid,
    grid2: CellGrid,
    column: Optional[str] = None,
    start_row: Optional[int] = None,
    config: Optional[Settings] = None,
    log: Optional[RunLog] = None,
) -> ComparisonResult:
    """Compare the status column of two sheets and report into the run log."""
    config = config or get_settings()
    log = log if log is not None else RunLog()
    column = column or config.comparison_column
    start_row = start_row or config.comparison_start_row

    start_time = datetime.now()
    log.info("=== Sheet Comparison Started ===")
    log.info(f"Comparing column {column} from row {start_row}")

    comparison = compare_columns(grid1, grid2, column, start_row)
    log_comparison(comparison, log, limit=config.mismatch_report_limit)

    duration = (datetime.now() - start_time).total_seconds()
    log.info(f"=== Comparison completed in {duration:.2f} seconds ===")
    return comparison


def _read_source(
    source: ReferenceSource,
    config: Settings,
    bounds: dict,
    result: ReconciliationResult,
    log: RunLog,
) -> set[str]:
    """Read one reference source into a set of identifiers."""
    if source.kind == "document":
        log.info(f"Reading identifiers from document '{source.name}'...")
        document = read_document(source.pages, source.selected_pages, **bounds)
        result.documents[source.name] = document
        for page, count in document.counts_per_page.items():
            log.info(f"  Page {page}: {count} identifiers")
        log.info(f"Found {document.total} identifiers in '{source.name}'.")
        return set(document.eans)

    if source.grid is None:
        _fail(log, ConfigurationError(f"Reference source '{source.name}' has no sheet to read."))

    start_row = source.start_row if source.start_row is not None else config.reference_start_row
    column = source.ean_column or config.ean_column
    log.info(f"Reading identifiers from '{source.name}' (column {column})...")
    eans = read_reference_identifiers(source.grid, column, start_row, **bounds)
    log.info(f"Found {len(eans)} identifiers in '{source.name}'.")
    return eans


def _log_samples(
    log: RunLog,
    main_eans: dict[int, str],
    identifiers_by_source: dict[str, set[str]],
    size: int,
) -> None:
    if size <= 0:
        return

    sample = list(main_eans.values())[:size]
    log.info(f"Sample main sheet identifiers (first {size}): {', '.join(sample)}")

    for name, eans in identifiers_by_source.items():
        if eans:
            sample = sorted(eans)[:size]
            log.info(f"Sample '{name}' identifiers (first {size}): {', '.join(sample)}")


def _fail(log: RunLog, error: Exception) -> None:
    log.error(str(error))
    raise error
