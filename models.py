"""
Type definitions and enums shared across the smellscan CLI.

This module contains the small vocabulary types used by the pairing, detection
and reporting stages so that every layer talks about the same things.
"""

from enum import StrEnum
from typing import TypedDict


class ClassKind(StrEnum):
    """
    Role of a source file in the project.

    A file is a TEST file when its simple name follows one of the recognised
    test naming conventions (see `constants.TEST_PREFIX` and
    `constants.TEST_SUFFIXES`). Everything else found under the production
    root is PRODUCTION.
    """

    PRODUCTION = "production"
    TEST = "test"


class ColumnRole(StrEnum):
    """
    Role of a column in the detector output.

    IDENTIFYING columns describe which class or file a row belongs to,
    METRIC columns hold a per-smell count.
    """

    IDENTIFYING = "identifying"
    METRIC = "metric"


class TieBreak(StrEnum):
    """
    Strategy used when two test files claim the same production class.

    FIRST keeps the first test found while walking the test tree.
    SHORTEST_PATH prefers the test whose path is shortest, keeping the earlier
    one on equal length. ERROR refuses to guess and aborts the run.
    """

    FIRST = "first"
    SHORTEST_PATH = "shortest-path"
    ERROR = "error"


class WarningKind(StrEnum):
    """Non-fatal conditions surfaced to the user at the end of a run."""

    NO_PAIRS = "no_pairs"
    DETECTOR_EXIT_CODE = "detector_exit_code"
    EMPTY_OUTPUT = "empty_output"
    NO_DATA_ROWS = "no_data_rows"


class SettingsFile(TypedDict, total=False):
    """
    Keys accepted in the optional `.smellscan.json` settings file.

    Every key is optional; command-line options take precedence over any
    value read from the file.
    """

    main_src: str
    test_src: str
    input_csv_name: str
    output_dir: str
    app_name: str
    detector: str
    java: str
    timeout: float
    tie_break: str
    extensions: list[str]
