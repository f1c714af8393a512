"""
Custom exception classes for the smellscan CLI.

This module defines the fatal errors raised while preparing the detector input,
running the detector and reading its output. Each exception carries structured
information (message, offending path, original exception) so the CLI can print
a helpful report instead of a raw traceback.

Non-fatal conditions are not exceptions: they are collected as `RunWarning`
values (see `core.models`).
"""

import os
from typing import Optional


class FileIOError(Exception):
    """
    Base exception for file I/O errors.

    Attributes:
        message: A human-readable error message describing what went wrong.
        file_path: The path involved in the failed operation, if known.
        original_exception: The underlying exception that caused this error, if any.
    """

    default_message = "An error occurred during file I/O operation"

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.file_path = file_path
        self.original_exception = original_exception


class InvalidFilePathError(FileIOError):
    """Raised when a path is missing, is not a directory, or is not writable."""

    default_message = "Invalid file path provided"


class FileReadError(FileIOError):
    """Raised when reading a file fails."""

    default_message = "Failed to read file"


class FileWriteError(FileIOError):
    """Raised when writing a file fails."""

    default_message = "Failed to write file"


class DetectorError(Exception):
    """
    Base exception for failures around the external TestSmellDetector.

    Attributes:
        message: A human-readable error message describing what went wrong.
        original_exception: The underlying exception that caused this error, if any.
        diagnostic_info: A dictionary containing the exception type, its details
            and the OS name, printed when the user is asked to report the problem.
    """

    default_message = "An error occurred while running the test smell detector"

    def __init__(
        self,
        message: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.original_exception = original_exception
        self.diagnostic_info = {
            "type": (
                type(original_exception).__name__ if original_exception else "Unknown"
            ),
            "details": str(original_exception) if original_exception else "No details",
            "os_name": os.name,
        }


class ResourceMissingError(DetectorError):
    """
    Raised when the detector jar cannot be located.

    This happens when the jar is neither bundled with the application nor
    available at the path given on the command line.
    """

    default_message = "The TestSmellDetector jar could not be found"


class DetectorLaunchError(DetectorError):
    """Raised when the java process cannot be started at all."""

    default_message = "Failed to start the test smell detector"


class DetectorTimeoutError(DetectorError):
    """Raised when the detector does not finish within the configured timeout."""

    default_message = "The test smell detector timed out"


class OutputMissingError(DetectorError):
    """
    Raised when the detector finished but left no output file behind.

    The detector writes `Output_TestSmellDetection_<timestamp>.csv` into its
    working directory; when no such file exists there is nothing to report.
    """

    default_message = "The test smell detector produced no output"


class AmbiguousMatchError(Exception):
    """
    Raised when two different test files claim the same production class.

    Only raised under the `error` tie-break strategy.

    Attributes:
        production_name: The production simple name both tests resolve to.
        candidates: The competing test file paths, in discovery order.
    """

    def __init__(self, production_name: str, candidates: list[str]):
        self.production_name = production_name
        self.candidates = candidates
        self.message = (
            f"Ambiguous test match for '{production_name}': " + ", ".join(candidates)
        )
        super().__init__(self.message)


class ConfigError(Exception):
    """Raised when the settings file or a command-line value is invalid."""

    def __init__(self, message: Optional[str] = None):
        self.message = message or "Invalid configuration"
        super().__init__(self.message)
