"""
Progress reporting protocol for decoupling UI from business logic.

The pipeline reports the progress of its stages through `ProgressDisplay`, so
the core logic never depends on Rich directly. `RichProgressDisplay` shows a
spinner in the terminal, `NoOpProgressDisplay` is used by tests.
"""

from enum import StrEnum
from types import TracebackType
from typing import Protocol

from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn, TimeElapsedColumn


class ProgressState(StrEnum):
    """
    Enumeration of progress states with associated color codes.

    Attributes:
        IN_PROGRESS: Magenta color for tasks currently being processed.
        COMPLETE: Green color for successfully completed tasks.
        WARNING: Yellow color for tasks that finished with a non-critical issue.
    """

    IN_PROGRESS = "magenta"
    COMPLETE = "green"
    WARNING = "yellow"


class ProgressDisplay(Protocol):
    """
    Protocol for progress reporting.

    The lifecycle is:
    1. Context manager entry (__enter__)
    2. on_start() - Called once at the beginning
    3. on_update() - Called any number of times during processing
    4. on_complete() - Called once at the end
    5. Context manager exit (__exit__)
    """

    def __enter__(self) -> "ProgressDisplay":
        """Enter the progress context."""

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the progress context."""

    def on_start(self, description: str) -> None:
        """Start an indeterminate task with the given description."""

    def on_update(self, description: str) -> None:
        """Replace the description of the running task."""

    def on_complete(
        self, description: str, state: ProgressState = ProgressState.COMPLETE
    ) -> None:
        """Mark the task as finished, styled with `state`."""


def create_progress() -> Progress:
    """
    Creates a Rich Progress instance with a spinner, a description and the
    elapsed time.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
    )


class RichProgressDisplay:
    """
    Rich UI implementation of ProgressDisplay.

    The detector gives no progress information while it runs, so every task
    is indeterminate: a spinner with the elapsed time.
    """

    def __init__(self) -> None:
        """Initialize RPD. Progress instance is created lazily."""
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __enter__(self) -> "RichProgressDisplay":
        self._progress = create_progress()
        self._progress.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._progress:
            self._progress.__exit__(exc_type, exc_val, exc_tb)

    def _require_progress(self) -> Progress:
        if not self._progress:
            raise RuntimeError(
                "RichProgressDisplay must be used as a context manager. "
                "Use: with RichProgressDisplay() as rpd:"
            )
        return self._progress

    def on_start(self, description: str) -> None:
        """
        Create the spinner task.

        Raises:
            RuntimeError: If not used as a context manager.
        """
        progress = self._require_progress()
        self._task = progress.add_task(
            f"[{ProgressState.IN_PROGRESS}]{description}", total=None
        )

    def on_update(self, description: str) -> None:
        """
        Replace the task description.

        Raises:
            RuntimeError: If not used as a context manager or if on_start()
                was not called first.
        """
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError("on_start() must be called before on_update()")
        progress.update(
            self._task, description=f"[{ProgressState.IN_PROGRESS}]{description}"
        )

    def on_complete(
        self, description: str, state: ProgressState = ProgressState.COMPLETE
    ) -> None:
        """
        Stop the spinner and show the final description.

        Raises:
            RuntimeError: If not used as a context manager or if on_start()
                was not called first.
        """
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError("on_start() must be called before on_complete()")
        # A finished task needs a total for Rich to stop the spinner
        progress.update(
            self._task,
            total=1,
            completed=1,
            description=f"[{state}]{description}",
        )


class NoOpProgressDisplay:
    """
    No-op implementation of ProgressDisplay for testing.

    This implementation does nothing, allowing tests to run without
    Rich UI dependencies or actual progress bars.
    """

    def __enter__(self) -> "NoOpProgressDisplay":
        return self

    def __exit__(self, *args) -> None:
        """Exit the progress context (no-op)."""

    def on_start(self, description: str) -> None:
        """No-op: does nothing."""

    def on_update(self, description: str) -> None:
        """No-op: does nothing."""

    def on_complete(
        self, description: str, state: ProgressState = ProgressState.COMPLETE
    ) -> None:
        """No-op: does nothing."""
