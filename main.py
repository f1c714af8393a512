"""
smellscan CLI Entry Point.

This module implements the command-line interface for smellscan, a tool that
detects test smells in a Java project by pairing each test class with the
production class it exercises and handing the pairs to TestSmellDetector.

The pipeline operates in four stages:

1.  **Pairing**: Walks the production and test source trees and matches test
    classes to production classes using naming conventions (`TestFoo`, `FooTest`,
    `FooTests`, `FooTestCase` all exercise `Foo`).
2.  **Input Generation**: Writes the headerless `inputData.csv` expected by the
    detector into the output directory.
3.  **Detection**: Stages the bundled TestSmellDetector jar into the output
    directory and runs it with `java -jar`.
4.  **Reporting**: Reads the newest detector output CSV, infers which of its
    columns are smells and prints an aligned summary table.

Usage:
    $ python main.py --path /path/to/project
    $ python main.py --path /path/to/project --pairs-only --verbose

Dependencies:
    - Typer: CLI argument parsing and app structure.
    - Rich: Terminal UI, colors, and progress visualization.
    - Java + TestSmellDetector.jar: External engine used for smell detection.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich import print as pr
from rich.markup import escape

from core.config import build_config
from core.exceptions import (
    AmbiguousMatchError,
    ConfigError,
    DetectorError,
    FileIOError,
)
from core.pipeline import generate_input, run_detection
from models import TieBreak
from ui.summary import print_summary, print_warnings

app = typer.Typer()


@app.command()
def main(
    path: Annotated[
        Path,
        typer.Option(
            exists=True,  # Typer throws error if path doesn't exist
            file_okay=False,  # Typer throws error if it's a file, not a dir
            dir_okay=True,
            resolve_path=True,  # Automatically converts to absolute path
            help="Project root. Relative source and output paths resolve against it.",
        ),
    ] = Path.cwd(),  # If not provided, use the current working directory
    main_src: Annotated[
        str | None,
        typer.Option(help="Production source root (default: src/main/java)."),
    ] = None,
    test_src: Annotated[
        str | None,
        typer.Option(help="Test source root (default: src/test/java)."),
    ] = None,
    input_csv_name: Annotated[
        str | None,
        typer.Option(help="Name of the generated detector input (default: inputData.csv)."),
    ] = None,
    output_dir: Annotated[
        str | None,
        typer.Option(help="Directory the detector runs in (default: target)."),
    ] = None,
    app_name: Annotated[
        str | None,
        typer.Option(help="Application name written to the input CSV (default: project folder name)."),
    ] = None,
    detector: Annotated[
        str | None,
        typer.Option(help="Path to TestSmellDetector.jar (default: the bundled jar)."),
    ] = None,
    java: Annotated[
        str | None,
        typer.Option(help="Java executable used to run the detector."),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(help="Seconds to wait for the detector. 0 waits forever."),
    ] = None,
    tie_break: Annotated[
        str | None,
        typer.Option(
            help=f"How to settle a class claimed by several tests: {', '.join(list(TieBreak))}"
        ),
    ] = None,
    pairs_only: Annotated[
        bool,
        typer.Option(
            "--pairs-only",
            help="Only generate the detector input CSV, do not run the detector.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Print generated entries and detector output."),
    ] = False,
):
    """
    Detect test smells in a Java project.

    Pairs test classes with production classes, runs TestSmellDetector on the
    pairs and prints a per-test-class summary of the smells found. Warnings
    (no pairs, detector exit code, empty output) do not fail the run.

    Raises:
        typer.Exit: With code 1 on any fatal error.
    """
    try:
        config = build_config(
            path,
            main_src=main_src,
            test_src=test_src,
            output_dir=output_dir,
            input_csv_name=input_csv_name,
            app_name=app_name,
            detector=detector,
            java=java,
            timeout=timeout,
            tie_break=tie_break,
        )
    except ConfigError as e:
        pr(f"[red]Error:[/red] {escape(e.message)}")
        raise typer.Exit(code=1) from e

    pr(f"\n[green]Scanning: {escape(str(config.project_root))}...[/green]")

    try:
        if pairs_only:
            result = generate_input(config, verbose=verbose)
        else:
            result = run_detection(config, verbose=verbose)
    except FileIOError as e:
        print_file_io_err(e)
    except DetectorError as e:
        print_detector_err(e)
    except AmbiguousMatchError as e:
        pr("❌ [bold red]Ambiguous Test Match[/bold red]")
        pr(escape(e.message))
        pr("\n[yellow]Quick Fix:[/yellow] Rename one of the tests or use --tie-break first.")
        raise typer.Exit(code=1) from e
    except Exception as e:  # noqa: BLE001
        # Catch-all for any unexpected errors - ensures users always see
        # a friendly message instead of a raw Python stack trace
        print_unexpected_err(e)

    if result.report is not None:
        print_summary(result.report)
    print_warnings(result.warnings)

    if result.succeeded_cleanly:
        pr("\n[green]Done.[/green]")
    else:
        pr(f"\n[yellow]Done with {len(result.warnings)} warning(s).[/yellow]")


def print_file_io_err(e: FileIOError) -> None:
    """
    Displays a user-friendly error message for file I/O operation failures.

    Args:
        e (FileIOError): The exception that was raised, containing error details
            and file path information.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]File I/O Error[/bold red]")
    pr(f"The app encountered an error while working with files: {escape(e.message)}")
    if e.file_path:
        pr(f"File path: [yellow]{escape(e.file_path)}[/yellow]")

    pr(
        "\n[yellow]Quick Fix:[/yellow] Check the source paths, file permissions and available disk space."
    )
    if e.original_exception:
        pr(f"\nTechnical details: {escape(str(e.original_exception))}")

    raise typer.Exit(code=1) from e


def print_detector_err(e: DetectorError) -> None:
    """
    Displays a user-friendly error message for TestSmellDetector failures.

    Covers a missing jar, a missing Java runtime, a timeout and a run that left
    no output behind.

    Args:
        e (DetectorError): The exception that was raised, containing error details
            and diagnostic information.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Detector Error[/bold red]")
    pr(escape(e.message))
    pr(
        "\n[yellow]Quick Fix:[/yellow] Ensure Java is installed and the detector jar is available (see --detector)."
    )

    pr("\n--- PLEASE REPORT THIS ---")
    pr(f"Error Context: {escape(str(e))}")
    pr(f"Diagnostics: {escape(str(e.diagnostic_info))}")
    raise typer.Exit(code=1) from e


def print_unexpected_err(e: Exception) -> None:
    """
    Displays a user-friendly error message for unexpected errors.

    Args:
        e (Exception): The unexpected exception that was raised.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Unexpected Error[/bold red]")
    pr("An unexpected error occurred while processing your request.")
    pr(f"\n[yellow]Error Type:[/yellow] {type(e).__name__}")
    pr(f"[yellow]Error Message:[/yellow] {escape(str(e))}")

    pr("\n--- PLEASE REPORT THIS ---")
    pr(f"Error Type: {type(e).__name__}")
    pr(f"Error Message: {escape(str(e))}")
    if e.__cause__:
        pr(f"Caused by: {escape(str(e.__cause__))}")

    raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
