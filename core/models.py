"""
Core data models for the pairing, detection and reporting pipeline.

This module defines the data structures passed between the stages of a run:
the source files discovered on disk, the (test, production) pairs handed to the
detector, the parsed detector report and the overall result of a run.
"""

from dataclasses import dataclass, field
from pathlib import Path

from models import ClassKind, ColumnRole, WarningKind


@dataclass(frozen=True)
class SourceFile:
    """
    A source file found while walking a source tree.

    Attributes:
        path: Path to the file as discovered (relative to the walk root's parent
            or absolute, depending on how the root was given).
        simple_name: File name without directory and final extension
            (e.g. "FooTest" for "src/test/java/FooTest.java").
        kind: Whether the file is a production or a test class.
    """

    path: Path
    simple_name: str
    kind: ClassKind


@dataclass(frozen=True)
class MatchedPair:
    """
    A test file associated with the production class it exercises.

    Attributes:
        app_name: Application identifier written in the first detector column.
        test_file: The test source file.
        production_file: The production source file.
    """

    app_name: str
    test_file: SourceFile
    production_file: SourceFile


@dataclass(frozen=True)
class RunWarning:
    """A non-fatal condition encountered during a run."""

    kind: WarningKind
    message: str


@dataclass(frozen=True)
class ReportColumn:
    """
    One column of the detector output, as found in its header line.

    Attributes:
        index: Zero-based position of the column in each row.
        name: Column name, trimmed.
        role: Whether the column identifies the row or holds a smell count.
        display_name: Name shown in the summary, truncated for width.
    """

    index: int
    name: str
    role: ColumnRole
    display_name: str


@dataclass(frozen=True)
class ReportRow:
    """
    One analyzed test class in the detector output.

    Attributes:
        label: Short display name of the test class (file base name).
        fields: The raw fields of the row, as split from the CSV line.
        values: Smell values in metric-column order. Values missing from a
            short row are "0".
        metrics: Smell name to value, for lookups by column name.
    """

    label: str
    fields: tuple[str, ...]
    values: tuple[str, ...]
    metrics: dict[str, str]


@dataclass
class Report:
    """
    Parsed detector output and its rendered summary.

    Attributes:
        source: The CSV file the report was read from.
        columns: The schema inferred from the header line. Empty when the
            file was missing or empty.
        rows: Accepted data rows, in file order.
        skipped_rows: Number of data lines dropped for having fewer than two fields.
        lines: Rendered summary lines (header, rows and framing rules). Empty
            when there was nothing to render.
        warnings: Non-fatal issues found while parsing.
    """

    source: Path
    columns: list[ReportColumn] = field(default_factory=list)
    rows: list[ReportRow] = field(default_factory=list)
    skipped_rows: int = 0
    lines: list[str] = field(default_factory=list)
    warnings: list[RunWarning] = field(default_factory=list)

    @property
    def metric_columns(self) -> list[ReportColumn]:
        return [c for c in self.columns if c.role == ColumnRole.METRIC]

    @property
    def identifying_columns(self) -> list[ReportColumn]:
        return [c for c in self.columns if c.role == ColumnRole.IDENTIFYING]


@dataclass(frozen=True)
class DetectorRun:
    """
    Outcome of one detector invocation.

    Attributes:
        exit_code: Process exit status. Non-zero is reported as a warning.
        output_lines: Combined stdout/stderr lines printed by the detector.
    """

    exit_code: int
    output_lines: tuple[str, ...] = ()


@dataclass
class DetectionResult:
    """
    Everything a run produced, for programmatic consumers.

    Attributes:
        pairs: Matched (test, production) pairs written to the input CSV.
        input_csv: Absolute path of the generated detector input.
        detector_run: Detector outcome, or None when the detector was not run.
        output_csv: Detector output file that was summarised, if any.
        report: Parsed report, or None when the detector was not run.
        warnings: Every non-fatal condition of the run, in the order raised.
    """

    pairs: list[MatchedPair]
    input_csv: Path
    detector_run: DetectorRun | None = None
    output_csv: Path | None = None
    report: Report | None = None
    warnings: list[RunWarning] = field(default_factory=list)

    @property
    def succeeded_cleanly(self) -> bool:
        """True when the run finished without any warning."""
        return not self.warnings
