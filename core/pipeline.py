"""
The detection pipeline.

A run is a strictly sequential chain of stages, each consuming the output of
the previous one:

1.  **Pairing**: match test classes to production classes by name.
2.  **Input generation**: write the headerless input CSV for the detector.
3.  **Detection**: stage and run the TestSmellDetector jar and wait for it.
4.  **Reporting**: find the newest detector output, parse and render it.

Fatal problems (missing sources, missing detector, no output at all) raise.
Everything else is collected as `RunWarning` values on the returned
`DetectionResult` so callers can tell a clean run from a degraded one.
"""

from typing import Callable

from rich import print as pr
from rich.markup import escape

from adapters.detector import (
    find_latest_output,
    get_detector_path,
    run_detector,
    stage_detector,
)
from core.config import DetectionConfig
from core.csv_writer import write_input_csv
from core.file_io import ensure_directory
from core.models import DetectionResult, RunWarning
from core.pairing import pair_classes
from core.report import synthesize_report
from models import WarningKind
from ui.progress_display import ProgressDisplay, ProgressState, RichProgressDisplay
from utils import debug


def generate_input(config: DetectionConfig, verbose: bool = False) -> DetectionResult:
    """
    Pair the project's classes and write the detector input file.

    Args:
        config: The run configuration.
        verbose: Echo every generated input line.

    Returns:
        DetectionResult: The pairs and input file location, plus a NO_PAIRS
            warning when nothing could be paired.

    Raises:
        InvalidFilePathError: If a source root is missing or the output
            directory cannot be created.
        FileWriteError: If the input file cannot be written.
        AmbiguousMatchError: Under the `error` tie-break strategy only.
    """
    pr("\n[bold magenta]🔗 Pairing test classes with production classes...[/bold magenta]")

    pairs = pair_classes(
        config.main_src,
        config.test_src,
        config.app_name,
        config.extensions,
        config.tie_break,
    )

    ensure_directory(config.output_dir)
    lines = write_input_csv(pairs, config.input_csv)

    if verbose:
        for line in lines:
            debug(f"Entry added: {line}")

    result = DetectionResult(pairs=pairs, input_csv=config.input_csv.absolute())

    if not pairs:
        result.warnings.append(
            RunWarning(
                WarningKind.NO_PAIRS,
                "No test/production class pairs were found. The input CSV is empty.",
            )
        )
    else:
        pr(f"[green]✅ Found {len(pairs)} test/production pairs.[/green]")

    pr(f"Input CSV written to: [green]{escape(str(result.input_csv))}[/green]")
    return result


def run_detection(
    config: DetectionConfig,
    verbose: bool = False,
    progress_display: ProgressDisplay | None = None,
    run_factory: Callable | None = None,
) -> DetectionResult:
    """
    Run the whole pipeline: pairing, input generation, detection and reporting.

    Args:
        config: The run configuration.
        verbose: Echo generated input lines and the detector's output.
        progress_display: Optional progress display shown while the detector
            runs. Defaults to RichProgressDisplay.
        run_factory: Optional replacement for subprocess.run, passed to the
            detector adapter. Useful for testing.

    Returns:
        DetectionResult: Pairs, detector outcome, parsed report and warnings.

    Raises:
        ResourceMissingError: If the detector jar cannot be found or staged.
        DetectorLaunchError: If java cannot be started.
        DetectorTimeoutError: If the detector exceeds the configured timeout.
        OutputMissingError: If the detector left no output file.
        InvalidFilePathError, FileReadError, FileWriteError: On setup I/O failures.
    """
    # Locate the jar first so a broken install fails before any file is written
    jar_path = get_detector_path(config.detector)

    result = generate_input(config, verbose=verbose)

    staged_jar = stage_detector(jar_path, config.output_dir)

    pr("\n[bold magenta]🔬 Running TestSmellDetector...[/bold magenta]")
    display = progress_display if progress_display is not None else RichProgressDisplay()

    with display as rpd:
        rpd.on_start("Analyzing test classes...")
        detector_run = run_detector(
            staged_jar,
            config.input_csv_name,
            config.output_dir,
            java=config.java,
            timeout=config.timeout,
            run_factory=run_factory,
        )
        rpd.on_update("Reading detector output...")
        output_csv = find_latest_output(config.output_dir)
        report = synthesize_report(output_csv)
        if detector_run.exit_code == 0:
            rpd.on_complete("✅ Detector finished.")
        else:
            rpd.on_complete(
                f"⚠ Detector exited with code {detector_run.exit_code}.",
                ProgressState.WARNING,
            )

    result.detector_run = detector_run

    if verbose:
        for line in detector_run.output_lines:
            debug(f"[detector] {line}")

    if detector_run.exit_code != 0:
        result.warnings.append(
            RunWarning(
                WarningKind.DETECTOR_EXIT_CODE,
                f"TestSmellDetector finished with exit code {detector_run.exit_code}.",
            )
        )

    result.output_csv = output_csv
    result.report = report
    result.warnings.extend(report.warnings)

    return result
