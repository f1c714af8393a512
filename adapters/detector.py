"""
TestSmellDetector jar management and invocation.

This module locates the TestSmellDetector jar bundled with the application,
stages it into the output directory, runs it through `java -jar` and finds the
output file it leaves behind.
"""

import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable

from constants import (
    DEFAULT_JAVA,
    DETECTOR_JAR_NAME,
    DETECTOR_OUTPUT_PREFIX,
    DETECTOR_OUTPUT_SUFFIX,
)
from core.exceptions import (
    DetectorLaunchError,
    DetectorTimeoutError,
    OutputMissingError,
    ResourceMissingError,
)
from core.models import DetectorRun


def _get_base_path() -> Path:
    """
    Get the base path for bundled resources, handling PyInstaller packaging.

    When running as a PyInstaller bundle, the actual application files are
    extracted to a temporary directory. This function detects that scenario
    and returns the appropriate base path for locating bundled resources.

    Returns:
        Path: The base directory path where bundled resources are located.
            In PyInstaller bundles, this is sys._MEIPASS. Otherwise, it's
            the parent directory of this module (to access the bin/ directory).
    """
    if getattr(sys, "frozen", False):
        # PyInstaller sets _MEIPASS when frozen
        return Path(getattr(sys, "_MEIPASS", Path(__file__).parent))  # type: ignore[attr-defined]
    return Path(__file__).parent.parent


def get_detector_path(explicit_path: Path | None = None) -> Path:
    """
    Locate the TestSmellDetector jar.

    An explicitly configured path wins. Otherwise the jar is looked up in the
    `bin/` directory next to the application.

    Args:
        explicit_path: Optional jar path given on the command line or in the
            settings file.

    Returns:
        Path: Full path to the jar.

    Raises:
        ResourceMissingError: If the jar does not exist.
    """
    candidate = (
        explicit_path
        if explicit_path is not None
        else _get_base_path() / "bin" / DETECTOR_JAR_NAME
    )

    if not candidate.is_file():
        raise ResourceMissingError(
            message=f"TestSmellDetector jar not found: {candidate}",
            original_exception=FileNotFoundError(str(candidate)),
        )
    return candidate


def stage_detector(jar_path: Path, output_dir: Path) -> Path:
    """
    Copy the detector jar into the output directory, reusing an existing copy.

    The detector is run from the output directory, where it also writes its
    results.

    Args:
        jar_path: The bundled jar.
        output_dir: Directory the detector will run in. Must exist.

    Returns:
        Path: The staged jar inside `output_dir`.

    Raises:
        ResourceMissingError: If the jar cannot be copied.
    """
    staged = output_dir / jar_path.name
    if staged.exists():
        return staged

    try:
        shutil.copyfile(jar_path, staged)
    except OSError as e:
        raise ResourceMissingError(
            message=f"Failed to copy the detector jar to {output_dir}",
            original_exception=e,
        ) from e
    return staged


def build_command(jar_path: Path, input_csv_name: str, java: str = DEFAULT_JAVA) -> list[str]:
    """Build the `java -jar <jar> <input csv>` command line."""
    return [java, "-jar", str(jar_path.absolute()), input_csv_name]


def run_detector(
    jar_path: Path,
    input_csv_name: str,
    output_dir: Path,
    java: str = DEFAULT_JAVA,
    timeout: float | None = None,
    run_factory: Callable | None = None,
) -> DetectorRun:
    """
    Run the detector and wait for it to finish.

    The input file name is passed as the only argument and the detector runs
    with `output_dir` as its working directory. A non-zero exit code is not an
    error here; the caller decides how to report it.

    Args:
        jar_path: The detector jar.
        input_csv_name: Name of the input CSV inside `output_dir`.
        output_dir: Working directory of the detector.
        java: Java executable to use.
        timeout: Seconds to wait before killing the detector. None waits forever.
        run_factory: Optional replacement for subprocess.run. Useful for testing.

    Returns:
        DetectorRun: The exit code and combined output lines.

    Raises:
        DetectorLaunchError: If the java executable cannot be started.
        DetectorTimeoutError: If the detector runs longer than `timeout`.
    """
    run = run_factory if run_factory else subprocess.run
    cmd = build_command(jar_path, input_csv_name, java)

    try:
        completed = run(
            cmd,
            cwd=output_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise DetectorTimeoutError(
            message=f"The test smell detector did not finish within {timeout} seconds",
            original_exception=e,
        ) from e
    except OSError as e:
        raise DetectorLaunchError(
            message=f"Failed to start '{java}'. Is a Java runtime installed?",
            original_exception=e,
        ) from e

    output = completed.stdout or ""
    return DetectorRun(
        exit_code=completed.returncode,
        output_lines=tuple(output.splitlines()),
    )


def is_detector_output(path: Path) -> bool:
    """Tell whether `path` is named like a detector output file."""
    return path.name.startswith(DETECTOR_OUTPUT_PREFIX) and path.name.endswith(
        DETECTOR_OUTPUT_SUFFIX
    )


def find_latest_output(output_dir: Path) -> Path:
    """
    Find the most recently modified detector output file in `output_dir`.

    Args:
        output_dir: Directory the detector ran in.

    Returns:
        Path: The newest `Output_TestSmellDetection_*.csv` file.

    Raises:
        OutputMissingError: If no output file exists.
    """
    matches = [
        p for p in output_dir.iterdir() if p.is_file() and is_detector_output(p)
    ]

    if not matches:
        raise OutputMissingError(
            message=f"No detector output found in {output_dir.absolute()}"
        )

    return max(matches, key=lambda p: p.stat().st_mtime)
