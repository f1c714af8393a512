"""
Application-wide constants.

This module defines the naming conventions used to recognise test classes, the
defaults mirroring a conventional Maven project layout, the file-name contract of
the TestSmellDetector tool and the column layout of the rendered summary.
"""

from typing import Final

# Naming conventions that mark a class as a test class.
# A simple name may satisfy several of them at once (e.g. "TestFooTest"),
# every satisfied convention contributes a candidate production name.
TEST_PREFIX: Final[str] = "Test"
TEST_SUFFIXES: Final[tuple[str, ...]] = ("Test", "Tests", "TestCase")

# Defaults mirroring the standard Maven layout.
DEFAULT_MAIN_SRC: Final[str] = "src/main/java"
DEFAULT_TEST_SRC: Final[str] = "src/test/java"
DEFAULT_OUTPUT_DIR: Final[str] = "target"
DEFAULT_INPUT_CSV_NAME: Final[str] = "inputData.csv"
DEFAULT_EXTENSIONS: Final[tuple[str, ...]] = (".java",)
DEFAULT_JAVA: Final[str] = "java"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 600.0

SETTINGS_FILE_NAME: Final[str] = ".smellscan.json"

# Detector artifact and the files it produces.
DETECTOR_JAR_NAME: Final[str] = "TestSmellDetector.jar"
DETECTOR_OUTPUT_PREFIX: Final[str] = "Output_TestSmellDetection_"
DETECTOR_OUTPUT_SUFFIX: Final[str] = ".csv"

# Detector output columns that identify a row rather than count a smell.
# Compared case-insensitively. Any column containing "Path" (case-sensitive)
# is identifying as well.
IDENTIFYING_COLUMNS: Final[frozenset[str]] = frozenset(
    {
        "app",
        "testclass",
        "productionclass",
        "relativetestfilepath",
        "relativeproductionfilepath",
    }
)
IDENTIFYING_SUBSTRING: Final[str] = "Path"

# Summary table layout
LABEL_HEADER: Final[str] = "FILE"
LABEL_WIDTH: Final[int] = 25
METRIC_WIDTH: Final[int] = 10
MAX_COLUMN_NAME_LENGTH: Final[int] = 20
MAX_LABEL_LENGTH: Final[int] = 24
ELLIPSIS: Final[str] = "..."
RULE: Final[str] = "-" * 75
SUMMARY_TITLE: Final[str] = "TEST SMELLS SUMMARY"
