"""
Tests for the TestSmellDetector adapter.

Tests cover:
- _get_base_path: PyInstaller vs normal execution path resolution
- get_detector_path: explicit and bundled jar lookup
- stage_detector: copying and reuse of the staged jar
- run_detector: command line, working directory, exit codes, timeouts
- find_latest_output: name filter and newest-file selection
"""

import os
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from adapters.detector import (
    _get_base_path,
    build_command,
    find_latest_output,
    get_detector_path,
    is_detector_output,
    run_detector,
    stage_detector,
)
from core.exceptions import (
    DetectorLaunchError,
    DetectorTimeoutError,
    OutputMissingError,
    ResourceMissingError,
)


# ============================================================================
# Tests for _get_base_path
# ============================================================================


@pytest.mark.unit
@pytest.mark.mock
def test_get_base_path_normal_execution(mocker):
    """_get_base_path should return parent.parent when not frozen."""
    mock_sys = mocker.patch("adapters.detector.sys")
    mock_sys.frozen = False

    with patch("adapters.detector.__file__", "/some/path/adapters/detector.py"):
        assert _get_base_path() == Path("/some/path")


@pytest.mark.unit
@pytest.mark.mock
def test_get_base_path_pyinstaller_frozen(mocker):
    """_get_base_path should return _MEIPASS when frozen."""
    mock_sys = mocker.patch("adapters.detector.sys")
    mock_sys.frozen = True
    mock_sys._MEIPASS = "/tmp/pyinstaller_extracted"

    assert _get_base_path() == Path("/tmp/pyinstaller_extracted")


# ============================================================================
# Tests for get_detector_path
# ============================================================================


@pytest.mark.unit
def test_get_detector_path_explicit(fake_jar):
    assert get_detector_path(fake_jar) == fake_jar


@pytest.mark.unit
def test_get_detector_path_explicit_missing_raises(tmp_path):
    with pytest.raises(ResourceMissingError) as exc_info:
        get_detector_path(tmp_path / "missing.jar")

    assert "missing.jar" in exc_info.value.message
    assert exc_info.value.diagnostic_info["type"] == "FileNotFoundError"


@pytest.mark.unit
@pytest.mark.mock
def test_get_detector_path_bundled(tmp_path, mocker):
    (tmp_path / "bin").mkdir()
    jar = tmp_path / "bin" / "TestSmellDetector.jar"
    jar.write_bytes(b"jar")
    mocker.patch("adapters.detector._get_base_path", return_value=tmp_path)

    assert get_detector_path() == jar


@pytest.mark.unit
@pytest.mark.mock
def test_get_detector_path_bundled_missing_raises(tmp_path, mocker):
    mocker.patch("adapters.detector._get_base_path", return_value=tmp_path)

    with pytest.raises(ResourceMissingError):
        get_detector_path()


# ============================================================================
# Tests for stage_detector
# ============================================================================


@pytest.mark.unit
def test_stage_detector_copies_jar(fake_jar, tmp_path):
    out = tmp_path / "target"
    out.mkdir()

    staged = stage_detector(fake_jar, out)

    assert staged == out / "TestSmellDetector.jar"
    assert staged.read_bytes() == fake_jar.read_bytes()


@pytest.mark.unit
def test_stage_detector_reuses_existing_copy(fake_jar, tmp_path):
    out = tmp_path / "target"
    out.mkdir()
    existing = out / "TestSmellDetector.jar"
    existing.write_bytes(b"already here")

    staged = stage_detector(fake_jar, out)

    assert staged == existing
    assert staged.read_bytes() == b"already here"


@pytest.mark.unit
def test_stage_detector_copy_failure_raises(fake_jar, tmp_path):
    with pytest.raises(ResourceMissingError):
        stage_detector(fake_jar, tmp_path / "does-not-exist")


# ============================================================================
# Tests for run_detector
# ============================================================================


@pytest.mark.unit
def test_build_command(tmp_path):
    jar = tmp_path / "TestSmellDetector.jar"

    assert build_command(jar, "inputData.csv", "/opt/java/bin/java") == [
        "/opt/java/bin/java",
        "-jar",
        str(jar),
        "inputData.csv",
    ]


@pytest.mark.unit
@pytest.mark.mock
def test_run_detector_invocation_contract(fake_jar, tmp_path, fake_run_factory):
    """The input file name is the only argument and cwd is the output directory."""
    fake_run = fake_run_factory(stdout="Started\nDone\n")

    result = run_detector(fake_jar, "inputData.csv", tmp_path, timeout=5, run_factory=fake_run)

    cmd, kwargs = fake_run.calls[0]
    assert cmd == ["java", "-jar", str(fake_jar), "inputData.csv"]
    assert kwargs["cwd"] == tmp_path
    assert kwargs["timeout"] == 5
    assert kwargs["stderr"] == subprocess.STDOUT
    assert result.exit_code == 0
    assert result.output_lines == ("Started", "Done")


@pytest.mark.unit
@pytest.mark.mock
def test_run_detector_non_zero_exit_is_returned(fake_jar, tmp_path, fake_run_factory):
    result = run_detector(
        fake_jar, "inputData.csv", tmp_path, run_factory=fake_run_factory(returncode=3)
    )

    assert result.exit_code == 3


@pytest.mark.unit
@pytest.mark.mock
def test_run_detector_timeout_raises(fake_jar, tmp_path):
    def slow_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    with pytest.raises(DetectorTimeoutError) as exc_info:
        run_detector(fake_jar, "inputData.csv", tmp_path, timeout=1, run_factory=slow_run)

    assert "1 seconds" in exc_info.value.message


@pytest.mark.unit
@pytest.mark.mock
def test_run_detector_missing_java_raises(fake_jar, tmp_path):
    def no_java(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    with pytest.raises(DetectorLaunchError) as exc_info:
        run_detector(fake_jar, "inputData.csv", tmp_path, java="nojava", run_factory=no_java)

    assert "nojava" in exc_info.value.message


@pytest.mark.unit
@pytest.mark.mock
def test_run_detector_uses_subprocess_run_by_default(fake_jar, tmp_path, mocker):
    mock_run = mocker.patch("adapters.detector.subprocess.run")
    mock_run.return_value = subprocess.CompletedProcess([], 0, stdout=None)

    result = run_detector(fake_jar, "inputData.csv", tmp_path)

    mock_run.assert_called_once()
    assert result.output_lines == ()


# ============================================================================
# Tests for find_latest_output
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,expected",
    [
        ("Output_TestSmellDetection_1700000000.csv", True),
        ("Output_TestSmellDetection_.csv", True),
        ("Output_TestSmellDetection_1.txt", False),
        ("output_testsmelldetection_1.csv", False),
        ("inputData.csv", False),
    ],
)
def test_is_detector_output(name, expected):
    assert is_detector_output(Path(name)) is expected


@pytest.mark.unit
def test_find_latest_output_picks_newest(tmp_path):
    old = tmp_path / "Output_TestSmellDetection_1.csv"
    new = tmp_path / "Output_TestSmellDetection_2.csv"
    unrelated = tmp_path / "inputData.csv"
    for path in (new, old, unrelated):
        path.write_text("x", encoding="utf-8")
    os.utime(old, (1_000, 1_000))
    os.utime(new, (2_000, 2_000))
    os.utime(unrelated, (3_000, 3_000))

    assert find_latest_output(tmp_path) == new


@pytest.mark.unit
def test_find_latest_output_none_raises(tmp_path):
    (tmp_path / "inputData.csv").write_text("", encoding="utf-8")

    with pytest.raises(OutputMissingError) as exc_info:
        find_latest_output(tmp_path)

    assert str(tmp_path) in exc_info.value.message
