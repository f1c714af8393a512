"""
Parsing and rendering of the TestSmellDetector output.

The detector writes one CSV file per run whose columns are only known once the
file is read: a handful of columns identify the analyzed class (app, paths,
class names) and every other column counts one test smell. This module infers
that schema from the header line, reads every data row against it and renders
a fixed-width summary table.

Parsing is tolerant: rows that are too short to identify a class are skipped,
missing smell values read as "0", and commas inside double-quoted fields do not
split a field. Problems are reported as `RunWarning` values on the returned
`Report`, never raised. Only I/O failures while reading the file are fatal.
"""

import re
from pathlib import Path, PurePosixPath

from constants import (
    ELLIPSIS,
    IDENTIFYING_COLUMNS,
    IDENTIFYING_SUBSTRING,
    LABEL_HEADER,
    LABEL_WIDTH,
    MAX_COLUMN_NAME_LENGTH,
    MAX_LABEL_LENGTH,
    METRIC_WIDTH,
    RULE,
    SUMMARY_TITLE,
)
from core.file_io import FileReader, FilesystemFileReader
from core.models import Report, ReportColumn, ReportRow, RunWarning
from models import ColumnRole, WarningKind

# A comma followed by an even number of double quotes up to the end of the line
# lies outside any quoted region.
_UNQUOTED_COMMA = re.compile(r',(?=(?:[^"]*"[^"]*")*[^"]*$)')


def split_csv_line(line: str) -> list[str]:
    """
    Split a CSV line on the commas that are not inside double quotes.

    Trailing empty fields are kept and quotes are left in place.

    Args:
        line: One line of CSV, without its terminator.

    Returns:
        list[str]: The fields of the line.
    """
    return _UNQUOTED_COMMA.split(line)


def classify_column(name: str) -> ColumnRole:
    """
    Decide whether a detector column identifies a row or counts a smell.

    A column is IDENTIFYING when its name case-insensitively equals one of the
    known identity columns, or when it contains "Path" (case-sensitive).

    Args:
        name: Trimmed column name from the header line.

    Returns:
        ColumnRole: IDENTIFYING or METRIC.
    """
    if name.lower() in IDENTIFYING_COLUMNS or IDENTIFYING_SUBSTRING in name:
        return ColumnRole.IDENTIFYING
    return ColumnRole.METRIC


def parse_header(header_line: str) -> list[ReportColumn]:
    """Infer the report schema from the header line, which is split on plain commas."""
    columns = []
    for index, raw_name in enumerate(header_line.split(",")):
        name = raw_name.strip()
        columns.append(
            ReportColumn(
                index=index,
                name=name,
                role=classify_column(name),
                display_name=name[:MAX_COLUMN_NAME_LENGTH],
            )
        )
    return columns


def row_label(fields: list[str]) -> str:
    """
    Build the short display name of a row.

    The test class path is expected in the second field (the first holds the
    app name); the first field is used when there is no second one. The label is
    the file name without extension, shortened with an ellipsis past 24 characters.
    """
    raw = fields[1] if len(fields) > 1 else fields[0]
    raw = raw.strip().strip('"').replace("\\", "/")
    label = PurePosixPath(raw).stem if raw else ""

    if len(label) > MAX_LABEL_LENGTH:
        label = label[: MAX_LABEL_LENGTH - len(ELLIPSIS)] + ELLIPSIS
    return label


def parse_row(fields: list[str], metric_columns: list[ReportColumn]) -> ReportRow:
    """Read one data row against the metric columns, substituting "0" for missing values."""
    values = tuple(
        fields[column.index].strip() if column.index < len(fields) else "0"
        for column in metric_columns
    )
    return ReportRow(
        label=row_label(fields),
        fields=tuple(fields),
        values=values,
        metrics={column.name: value for column, value in zip(metric_columns, values)},
    )


def render_summary(report: Report) -> list[str]:
    """
    Render the fixed-width summary table of a parsed report.

    Returns:
        list[str]: Title block, header line, rule, one line per row and a
            closing rule.
    """
    metric_columns = report.metric_columns

    header = f"{LABEL_HEADER:<{LABEL_WIDTH}}" + "".join(
        f" | {column.display_name:<{METRIC_WIDTH}}" for column in metric_columns
    )

    lines = [RULE, SUMMARY_TITLE.center(len(RULE)).rstrip(), RULE, header, RULE]
    for row in report.rows:
        lines.append(
            f"{row.label:<{LABEL_WIDTH}}"
            + "".join(f" | {value:<{METRIC_WIDTH}}" for value in row.values)
        )
    lines.append(RULE)
    return lines


def parse_report(csv_path: Path, file_reader: FileReader | None = None) -> Report:
    """
    Parse a detector output file into a `Report` without rendering it.

    Args:
        csv_path: The detector output file.
        file_reader: Optional reader. Defaults to FilesystemFileReader.

    Returns:
        Report: The inferred schema and accepted rows. A missing or empty file
            yields an empty report carrying an EMPTY_OUTPUT warning, a file with no
            usable data row carries a NO_DATA_ROWS warning.

    Raises:
        FileReadError: If the file exists but cannot be read.
    """
    reader = file_reader if file_reader is not None else FilesystemFileReader()
    report = Report(source=csv_path)

    content = reader.read_file(csv_path)
    if not content:
        report.warnings.append(
            RunWarning(
                WarningKind.EMPTY_OUTPUT,
                f"The detector output is empty or missing: {csv_path}",
            )
        )
        return report

    header_line, *data_lines = content.splitlines()
    report.columns = parse_header(header_line)
    metric_columns = report.metric_columns

    for line in data_lines:
        fields = split_csv_line(line)
        if len(fields) < 2:
            report.skipped_rows += 1
            continue
        report.rows.append(parse_row(fields, metric_columns))

    if not report.rows:
        report.warnings.append(
            RunWarning(
                WarningKind.NO_DATA_ROWS,
                "The detector output has a header but no data rows. "
                "Likely cause: malformed CSV input or wrong paths in the input file.",
            )
        )

    return report


def synthesize_report(csv_path: Path, file_reader: FileReader | None = None) -> Report:
    """
    Parse a detector output file and render its summary.

    The summary is only rendered when the file had a header; an empty or
    missing file yields a report with no lines and an EMPTY_OUTPUT warning.

    Raises:
        FileReadError: If the file exists but cannot be read.
    """
    report = parse_report(csv_path, file_reader)
    if report.columns:
        report.lines = render_summary(report)
    return report
