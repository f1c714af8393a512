"""
Run configuration.

Every input of a run is carried explicitly by a `DetectionConfig` instead of
being read from the process state: the project root, both source roots, the
output directory and the detector location. Values come from three layers, the
last one winning:

1.  Built-in defaults mirroring a standard Maven layout (`constants.py`).
2.  The optional `.smellscan.json` settings file in the project root.
3.  Command-line options.

Relative paths are resolved against the project root.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_INPUT_CSV_NAME,
    DEFAULT_JAVA,
    DEFAULT_MAIN_SRC,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TEST_SRC,
    DEFAULT_TIMEOUT_SECONDS,
    SETTINGS_FILE_NAME,
)
from core.exceptions import ConfigError
from core.file_io import FileReader, FilesystemFileReader
from models import SettingsFile, TieBreak


@dataclass(frozen=True)
class DetectionConfig:
    """
    Fully resolved configuration of one run.

    Attributes:
        project_root: Absolute project directory.
        main_src: Absolute root of the production sources.
        test_src: Absolute root of the test sources.
        output_dir: Absolute directory the input CSV is written to and the
            detector runs in.
        input_csv_name: File name of the generated detector input.
        app_name: Identifier written in the first column of every input line.
        extensions: Source file suffixes to consider.
        detector: Explicit detector jar, or None to use the bundled one.
        java: Java executable used to run the detector.
        timeout: Seconds to wait for the detector. None waits forever.
        tie_break: How to settle a production class claimed by several tests.
    """

    project_root: Path
    main_src: Path
    test_src: Path
    output_dir: Path
    input_csv_name: str = DEFAULT_INPUT_CSV_NAME
    app_name: str = ""
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    detector: Path | None = None
    java: str = DEFAULT_JAVA
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS
    tie_break: TieBreak = TieBreak.FIRST

    @property
    def input_csv(self) -> Path:
        return self.output_dir / self.input_csv_name


def load_settings(
    project_root: Path, file_reader: FileReader | None = None
) -> SettingsFile:
    """
    Read the optional settings file of a project.

    Args:
        project_root: Directory that may contain `.smellscan.json`.
        file_reader: Optional reader. Defaults to FilesystemFileReader.

    Returns:
        SettingsFile: The parsed settings, or an empty dict when the file is
            absent or empty.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    reader = file_reader if file_reader is not None else FilesystemFileReader()
    settings_path = project_root / SETTINGS_FILE_NAME

    content = reader.read_file(settings_path)
    if not content.strip():
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {settings_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{settings_path} must contain a JSON object")

    return data  # type: ignore[return-value]


# Expected JSON types of each settings file key, with the wording used in errors
_SETTING_TYPES: dict[str, tuple[tuple[type, ...], str]] = {
    "main_src": ((str,), "a string"),
    "test_src": ((str,), "a string"),
    "output_dir": ((str,), "a string"),
    "input_csv_name": ((str,), "a string"),
    "app_name": ((str,), "a string"),
    "detector": ((str,), "a string"),
    "java": ((str,), "a string"),
    "tie_break": ((str,), "a string"),
    "timeout": ((int, float, type(None)), "a number or null"),
    "extensions": ((list, str), "a list of strings"),
}


def _setting(settings: SettingsFile, key: str, default: Any) -> Any:
    """
    Read one key of the settings file, checking its JSON type.

    Raises:
        ConfigError: If the value has the wrong type.
    """
    if key not in settings:
        return default

    value = settings[key]  # type: ignore[literal-required]
    types, expected = _SETTING_TYPES[key]
    # bool is an int subclass but never a valid setting
    if isinstance(value, bool) or not isinstance(value, types):
        raise ConfigError(
            f"'{key}' in {SETTINGS_FILE_NAME} must be {expected}, got {value!r}"
        )
    return value


def normalize_tie_break(value: str | TieBreak | None) -> TieBreak:
    """
    Convert a user-supplied tie-break name into a TieBreak value.

    Matching is case-insensitive and accepts underscores for dashes.

    Raises:
        ConfigError: If the name is not a known strategy.
    """
    if value is None:
        return TieBreak.FIRST
    if isinstance(value, TieBreak):
        return value

    normalized = value.strip().lower().replace("_", "-")
    for strategy in TieBreak:
        if str(strategy) == normalized:
            return strategy
    raise ConfigError(
        f"Unsupported tie-break strategy: {value}. "
        f"Available: {', '.join(list(TieBreak))}"
    )


def _normalize_extensions(values: Any) -> tuple[str, ...]:
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, (list, tuple)) or not values:
        raise ConfigError("'extensions' must be a non-empty list of file suffixes")
    if not all(isinstance(v, str) and v for v in values):
        raise ConfigError(f"'extensions' must only contain file suffixes, got {values!r}")
    return tuple(v if v.startswith(".") else f".{v}" for v in values)


def _resolve(project_root: Path, value: str | Path) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else project_root / path


def build_config(
    project_root: Path,
    *,
    main_src: str | Path | None = None,
    test_src: str | Path | None = None,
    output_dir: str | Path | None = None,
    input_csv_name: str | None = None,
    app_name: str | None = None,
    detector: str | Path | None = None,
    java: str | None = None,
    timeout: float | None = None,
    tie_break: str | TieBreak | None = None,
    extensions: list[str] | tuple[str, ...] | None = None,
    settings: SettingsFile | None = None,
) -> DetectionConfig:
    """
    Merge defaults, settings file values and explicit overrides into a config.

    Any keyword left as None falls back to the settings file, then to the
    built-in default.

    Args:
        project_root: The project directory. Made absolute.
        settings: Values read from the settings file. Loaded from
            `project_root` when None.

    Returns:
        DetectionConfig: The resolved configuration.

    Raises:
        ConfigError: If a value is invalid.
    """
    project_root = project_root.absolute()
    if settings is None:
        settings = load_settings(project_root)

    def pick(value: Any, key: str, default: Any) -> Any:
        if value is not None:
            return value
        return _setting(settings, key, default)

    resolved_timeout = pick(timeout, "timeout", DEFAULT_TIMEOUT_SECONDS)
    if resolved_timeout is not None:
        try:
            resolved_timeout = float(resolved_timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout: {resolved_timeout}") from e
        # Zero or negative disables the timeout
        if resolved_timeout <= 0:
            resolved_timeout = None

    csv_name = pick(input_csv_name, "input_csv_name", DEFAULT_INPUT_CSV_NAME)
    if not csv_name or Path(csv_name).name != csv_name:
        raise ConfigError(f"Input CSV name must be a plain file name: {csv_name!r}")

    detector_value = pick(detector, "detector", None)

    return DetectionConfig(
        project_root=project_root,
        main_src=_resolve(project_root, pick(main_src, "main_src", DEFAULT_MAIN_SRC)),
        test_src=_resolve(project_root, pick(test_src, "test_src", DEFAULT_TEST_SRC)),
        output_dir=_resolve(
            project_root, pick(output_dir, "output_dir", DEFAULT_OUTPUT_DIR)
        ),
        input_csv_name=csv_name,
        app_name=pick(app_name, "app_name", None) or project_root.name,
        extensions=_normalize_extensions(
            pick(extensions, "extensions", list(DEFAULT_EXTENSIONS))
        ),
        detector=(
            _resolve(project_root, detector_value) if detector_value else None
        ),
        java=pick(java, "java", DEFAULT_JAVA),
        timeout=resolved_timeout,
        tie_break=normalize_tie_break(pick(tie_break, "tie_break", None)),
    )
