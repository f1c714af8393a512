import os
from pathlib import Path
from typing import Callable, Iterable, Protocol

from core.exceptions import FileReadError, FileWriteError, InvalidFilePathError


class FileReader(Protocol):
    """
    Protocol defining the interface for file reading operations.

    This protocol specifies methods for reading files, allowing different
    implementations for production (filesystem) and testing (mocks).
    """

    def read_file(self, file_path: Path) -> str:
        """
        Read the text content of a file as UTF-8.

        Args:
            file_path: The path to the file to read.

        Returns:
            The file content as a string, or an empty string if the file doesn't
            exist or is binary.
        """


class FileWriter(Protocol):
    """
    Protocol defining the interface for file writing operations.

    This protocol specifies methods for writing data to files, allowing different
    implementations for production (filesystem) and testing (mocks).
    """

    def write_file(self, data: str, mode: str = "w") -> None:
        """
        Write data to a file.

        Args:
            data: String data to write.
            mode: File mode ("w" for write/truncate, "a" for append). Defaults to "w".
        """

    def write_lines(self, lines: Iterable[str]) -> None:
        """
        Replace the file content with the given lines, one per line.

        Args:
            lines: Lines to write, without line terminators.
        """


class FilesystemFileReader:

    def read_file(self, file_path: Path) -> str:
        """
        Read the text content of a file as UTF-8.

        Binary files and non-existent files are skipped. Invalid UTF-8 characters are
        silently ignored (errors="ignore"). I/O errors raise FileReadError.

        Args:
            file_path: The path to the file to read.

        Returns:
            The file content as a string, or an empty string if the file doesn't exist
            or is binary.

        Raises:
            FileReadError: If an I/O error occurs while reading the file.
        """

        if not file_path.is_file():
            return ""

        # We skip binary files
        if self._is_binary_file(file_path):
            return ""

        try:
            with file_path.open("r", encoding="utf-8", errors="ignore") as f:
                return f.read()
        except OSError as e:
            raise FileReadError(
                message=f"Failed to read file: {file_path}",
                file_path=str(file_path),
                original_exception=e,
            ) from e

    def _is_binary_file(self, file_path: Path) -> bool:
        """
        Determine if a file is binary by checking its first 1024 bytes for null bytes.

        Returns:
            bool: True if the file appears to be binary, False if it's likely text.

        Raises:
            FileReadError: If the file exists but cannot be opened.
        """
        try:
            with open(file_path, "rb") as f:
                return b"\0" in f.read(1024)
        except OSError as e:
            raise FileReadError(
                message=f"Failed to read file: {file_path}",
                file_path=str(file_path),
                original_exception=e,
            ) from e


class FilesystemFileWriter:
    def __init__(self, file_path: Path | None = None):
        self.file_path = file_path

    @classmethod
    def from_path(cls, file_path: Path) -> "FilesystemFileWriter":
        """
        Create a writer instance with an explicit file path.

        Args:
            file_path: The path to the file to manage.

        Returns:
            FilesystemFileWriter instance configured for the given path.

        Raises:
            InvalidFilePathError: If file_path is invalid (e.g., parent directory
                doesn't exist or is not writable).
        """
        parent = file_path.parent
        if not parent.exists():
            raise InvalidFilePathError(
                message=f"Parent directory does not exist: {parent}",
                file_path=str(file_path),
            )
        if not os.access(parent, os.W_OK):
            raise InvalidFilePathError(
                message=f"Parent directory is not writable: {parent}",
                file_path=str(file_path),
            )

        return cls(file_path)

    def write_file(self, data: str, mode: str = "w") -> None:
        """
        Writes data to the output file.

        Args:
            data: String data to write
            mode: File mode ("w" for write/truncate, "a" for append)

        Raises:
            InvalidFilePathError: If file path is not set.
            FileWriteError: If writing to the file fails.
        """
        if self.file_path is None:
            raise InvalidFilePathError("No file path set. Use a factory method first.")

        try:
            with open(self.file_path, mode, encoding="utf-8", newline="\n") as f:
                f.write(data)
        except OSError as e:
            raise FileWriteError(
                message=f"Failed to write to file: {self.file_path}",
                file_path=str(self.file_path),
                original_exception=e,
            ) from e

    def write_lines(self, lines: Iterable[str]) -> None:
        """
        Replaces the file content with `lines`, each terminated by a newline.

        An empty iterable leaves an empty (zero-length) file behind.

        Raises:
            InvalidFilePathError: If file path is not set.
            FileWriteError: If writing to the file fails.
        """
        self.write_file("".join(f"{line}\n" for line in lines), mode="w")


def ensure_directory(directory: Path) -> Path:
    """
    Create `directory` (and its parents) if it does not exist yet.

    Returns:
        Path: The directory itself.

    Raises:
        InvalidFilePathError: If the path exists but is not a directory, or the
            directory cannot be created.
    """
    if directory.exists() and not directory.is_dir():
        raise InvalidFilePathError(
            message=f"Not a directory: {directory}",
            file_path=str(directory),
        )
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InvalidFilePathError(
            message=f"Failed to create directory: {directory}",
            file_path=str(directory),
            original_exception=e,
        ) from e
    return directory


class MockFileReader:
    """
    Mock implementation of FileReader for testing.

    Returns configurable file contents, allowing tests to control file reading
    behavior without requiring filesystem operations or actual file I/O.
    """

    def __init__(
        self,
        return_value: str | None = None,
        read_file_fn: Callable[[Path], str] | None = None,
    ):
        """
        Initialize MockFileReader with configurable reading behavior.

        Args:
            return_value: If provided, always returns this value regardless of input.
                Takes precedence over read_file_fn if both are provided.
            read_file_fn: Optional callable that takes a file path and returns file content.

        Attributes (for test inspection):
            read_file_calls: List of file paths passed to read_file()
        """
        self.return_value = return_value
        self.read_file_fn = read_file_fn
        self.read_file_calls: list[Path] = []

    def read_file(self, file_path: Path) -> str:
        self.read_file_calls.append(file_path)
        if self.return_value is not None:
            return self.return_value
        if self.read_file_fn is not None:
            return self.read_file_fn(file_path)
        return ""


class MockFileWriter:
    """
    Mock implementation of FileWriter for testing.

    Tracks all method calls and stores the written data, allowing tests to
    inspect what would have been written without touching the filesystem.
    """

    def __init__(self, file_path: Path | None = None):
        self.file_path = file_path or Path("/mock/output.csv")
        self.write_file_calls: list[tuple[str, str]] = []
        self.written_data: str = ""

    def write_file(self, data: str, mode: str = "w") -> None:
        self.write_file_calls.append((data, mode))
        if mode == "w":
            self.written_data = data
        else:
            self.written_data += data

    def write_lines(self, lines: Iterable[str]) -> None:
        self.write_file("".join(f"{line}\n" for line in lines), mode="w")
