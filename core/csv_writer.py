"""
Serialization of matched pairs into the TestSmellDetector input format.

The detector reads a headerless CSV where each line is

    <app name>,<absolute test file path>,<absolute production file path>

A header line makes the detector fail, so none is ever written. Paths use
forward slashes on every platform.
"""

from pathlib import Path
from typing import Iterable

from core.file_io import FileWriter, FilesystemFileWriter
from core.models import MatchedPair


def normalize_path(path: Path) -> str:
    """Return the absolute form of `path` with every backslash turned into a slash."""
    return str(path.absolute()).replace("\\", "/")


def format_pair(pair: MatchedPair) -> str:
    """Format one pair as a detector input line."""
    return ",".join(
        (
            pair.app_name,
            normalize_path(pair.test_file.path),
            normalize_path(pair.production_file.path),
        )
    )


def serialize_pairs(pairs: Iterable[MatchedPair]) -> list[str]:
    """
    Serialize pairs into detector input lines, one line per pair, no header.

    Args:
        pairs: Matched pairs, in the order they should appear.

    Returns:
        list[str]: Lines without terminators.
    """
    return [format_pair(pair) for pair in pairs]


def write_input_csv(
    pairs: Iterable[MatchedPair],
    csv_path: Path,
    file_writer: FileWriter | None = None,
) -> list[str]:
    """
    Write the detector input file for `pairs`.

    An empty pair set still produces a (zero-length) file so the detector can be
    invoked and fail gracefully.

    Args:
        pairs: Matched pairs to write.
        csv_path: Destination of the input file. Its directory must exist.
        file_writer: Optional writer. Defaults to a FilesystemFileWriter for `csv_path`.

    Returns:
        list[str]: The lines that were written.

    Raises:
        InvalidFilePathError: If the destination directory is missing or read-only.
        FileWriteError: If writing fails.
    """
    writer = (
        file_writer
        if file_writer is not None
        else FilesystemFileWriter.from_path(csv_path)
    )
    lines = serialize_pairs(pairs)
    writer.write_lines(lines)
    return lines
