"""
Pairing of test classes with the production classes they exercise.

The pairing works in three steps:

1.  **Discovery**: both source trees are walked recursively in a stable
    (name-sorted, depth-first) order. Production files are filtered by extension
    only, test files by extension and by the test naming conventions.
2.  **Indexing**: every test file offers its candidate production names
    (see `core.naming`). The first test offering a name claims it, unless a
    different tie-break strategy is configured.
3.  **Matching**: production files are visited in discovery order and each one
    whose simple name was claimed by a test yields a `MatchedPair`.

Nothing here touches the file contents; the result only depends on file names
and the shape of the two trees.
"""

from pathlib import Path
from typing import Generator, Iterable

from core.exceptions import AmbiguousMatchError, FileReadError, InvalidFilePathError
from core.models import MatchedPair, SourceFile
from core.naming import classify, derive_candidate_names, simple_name
from models import ClassKind, TieBreak


def walk_source_files(root: Path, extensions: Iterable[str]) -> Generator[Path, None, None]:
    """
    Lazily yield every file under `root` whose suffix is one of `extensions`.

    Entries of a directory are visited in name order and sub-directories are
    descended into as they are met, so the order only depends on the tree.
    Symlinked directories are skipped, so a link cycle cannot repeat files.

    Args:
        root: Directory to walk.
        extensions: Accepted file suffixes, including the dot (e.g. ".java").

    Yields:
        Path: Each matching file, as `root / <relative path>`.

    Raises:
        InvalidFilePathError: If `root` does not exist or is not a directory.
        FileReadError: If a directory under `root` cannot be listed.
    """
    if not root.is_dir():
        raise InvalidFilePathError(
            message=f"Source directory does not exist: {root}",
            file_path=str(root),
        )

    suffixes = tuple(extensions)
    yield from _walk(root, suffixes)


def _walk(directory: Path, suffixes: tuple[str, ...]) -> Generator[Path, None, None]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise FileReadError(
            message=f"Failed to list directory: {directory}",
            file_path=str(directory),
            original_exception=e,
        ) from e

    for entry in entries:
        if entry.is_dir():
            # Symlinked directories are not followed
            if not entry.is_symlink():
                yield from _walk(entry, suffixes)
        elif entry.name.endswith(suffixes):
            yield entry


def discover_production_files(root: Path, extensions: Iterable[str]) -> list[SourceFile]:
    """Collect every production source file under `root`, in walk order."""
    return [
        SourceFile(path, simple_name(path), ClassKind.PRODUCTION)
        for path in walk_source_files(root, extensions)
    ]


def discover_test_files(root: Path, extensions: Iterable[str]) -> list[SourceFile]:
    """Collect the source files under `root` named like test classes, in walk order."""
    return [
        SourceFile(path, simple_name(path), ClassKind.TEST)
        for path in walk_source_files(root, extensions)
        if classify(path) == ClassKind.TEST
    ]


def build_test_index(
    test_files: Iterable[SourceFile], tie_break: TieBreak = TieBreak.FIRST
) -> dict[str, SourceFile]:
    """
    Map each candidate production name to the test file that claims it.

    Args:
        test_files: Test files in discovery order.
        tie_break: How to settle a name claimed by more than one test.
            FIRST keeps the first claimant. SHORTEST_PATH keeps the claimant with
            the shortest path (the earlier one on equal length). ERROR raises.

    Returns:
        dict[str, SourceFile]: Production simple name to claiming test file.

    Raises:
        AmbiguousMatchError: Under the ERROR strategy, when two different test
            files claim the same production name.
    """
    index: dict[str, SourceFile] = {}

    for test in test_files:
        for name in sorted(derive_candidate_names(test.simple_name)):
            bound = index.get(name)
            if bound is None:
                index[name] = test
                continue

            if tie_break == TieBreak.ERROR and bound.path != test.path:
                raise AmbiguousMatchError(name, [str(bound.path), str(test.path)])

            if tie_break == TieBreak.SHORTEST_PATH and len(str(test.path)) < len(
                str(bound.path)
            ):
                index[name] = test

    return index


def match_pairs(
    production_files: Iterable[SourceFile],
    test_index: dict[str, SourceFile],
    app_name: str,
) -> list[MatchedPair]:
    """Emit a pair for every production file whose name is claimed by a test."""
    return [
        MatchedPair(app_name, test_index[prod.simple_name], prod)
        for prod in production_files
        if prod.simple_name in test_index
    ]


def pair_classes(
    production_root: Path,
    test_root: Path,
    app_name: str,
    extensions: Iterable[str] = (".java",),
    tie_break: TieBreak = TieBreak.FIRST,
) -> list[MatchedPair]:
    """
    Pair the test classes under `test_root` with the classes under `production_root`.

    Args:
        production_root: Root of the production sources.
        test_root: Root of the test sources.
        app_name: Application identifier carried by every pair.
        extensions: Source file suffixes to consider.
        tie_break: Strategy for names claimed by several tests.

    Returns:
        list[MatchedPair]: Pairs in production discovery order. Empty when no
            production class has a matching test, which is not an error.

    Raises:
        InvalidFilePathError: If either root is not an existing directory.
        AmbiguousMatchError: Under the ERROR tie-break strategy only.
    """
    extensions = tuple(extensions)

    production_files = discover_production_files(production_root, extensions)
    test_files = discover_test_files(test_root, extensions)

    test_index = build_test_index(test_files, tie_break)
    pairs = match_pairs(production_files, test_index, app_name)

    return pairs
