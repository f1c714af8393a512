"""
Tests for the exceptions module.

Tests cover:
- FileIOError and its subclasses: default messages, file path, original exception
- DetectorError and its subclasses: default messages and diagnostic info
- AmbiguousMatchError: message built from the competing candidates
- ConfigError: default and custom messages
"""

import os

import pytest

from core.exceptions import (
    AmbiguousMatchError,
    ConfigError,
    DetectorError,
    DetectorLaunchError,
    DetectorTimeoutError,
    FileIOError,
    FileReadError,
    FileWriteError,
    InvalidFilePathError,
    OutputMissingError,
    ResourceMissingError,
)


# ============================================================================
# Tests for FileIOError and subclasses
# ============================================================================


@pytest.mark.unit
def test_file_io_error_default_message():
    """FileIOError should have a default message when none provided."""
    error = FileIOError()
    assert str(error) == "An error occurred during file I/O operation"
    assert error.message == "An error occurred during file I/O operation"
    assert error.file_path is None
    assert error.original_exception is None


@pytest.mark.unit
def test_file_io_error_with_all_parameters():
    """FileIOError should store message, file_path, and original_exception."""
    original = PermissionError("Access denied")

    error = FileIOError(
        message="Failed to read file",
        file_path="/path/to/data.txt",
        original_exception=original,
    )

    assert str(error) == "Failed to read file"
    assert error.file_path == "/path/to/data.txt"
    assert error.original_exception is original


@pytest.mark.unit
@pytest.mark.parametrize(
    "error_cls,default_message",
    [
        (InvalidFilePathError, "Invalid file path provided"),
        (FileReadError, "Failed to read file"),
        (FileWriteError, "Failed to write file"),
    ],
)
def test_file_io_subclasses_defaults(error_cls, default_message):
    error = error_cls()
    assert error.message == default_message
    assert isinstance(error, FileIOError)


@pytest.mark.unit
def test_invalid_file_path_error_positional_message():
    """The message may be passed positionally."""
    error = InvalidFilePathError("No file path set.")
    assert error.message == "No file path set."


# ============================================================================
# Tests for DetectorError and subclasses
# ============================================================================


@pytest.mark.unit
def test_detector_error_diagnostic_info_without_exception():
    error = DetectorError()

    assert error.message == "An error occurred while running the test smell detector"
    assert error.diagnostic_info == {
        "type": "Unknown",
        "details": "No details",
        "os_name": os.name,
    }


@pytest.mark.unit
def test_detector_error_diagnostic_info_with_exception():
    original = FileNotFoundError("java")
    error = DetectorError(message="cannot start", original_exception=original)

    assert str(error) == "cannot start"
    assert error.original_exception is original
    assert error.diagnostic_info["type"] == "FileNotFoundError"
    assert error.diagnostic_info["details"] == "java"


@pytest.mark.unit
@pytest.mark.parametrize(
    "error_cls",
    [ResourceMissingError, DetectorLaunchError, DetectorTimeoutError, OutputMissingError],
)
def test_detector_subclasses_inherit(error_cls):
    error = error_cls()
    assert isinstance(error, DetectorError)
    assert error.message == error_cls.default_message


@pytest.mark.unit
def test_detector_subclass_custom_message():
    error = OutputMissingError(message="No detector output found in /x")
    assert str(error) == "No detector output found in /x"


# ============================================================================
# Tests for AmbiguousMatchError / ConfigError
# ============================================================================


@pytest.mark.unit
def test_ambiguous_match_error_message():
    error = AmbiguousMatchError("Foo", ["a/FooTest.java", "b/TestFoo.java"])

    assert error.production_name == "Foo"
    assert error.candidates == ["a/FooTest.java", "b/TestFoo.java"]
    assert str(error) == "Ambiguous test match for 'Foo': a/FooTest.java, b/TestFoo.java"


@pytest.mark.unit
def test_config_error_messages():
    assert ConfigError().message == "Invalid configuration"
    assert str(ConfigError("bad timeout")) == "bad timeout"
