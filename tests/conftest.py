"""
Shared fixtures for the smellscan test suite.

This module provides reusable pytest fixtures: builders for on-disk Java
project trees, a fake detector jar and a fake `subprocess.run` replacement that
behaves like TestSmellDetector without starting a JVM.
"""

import subprocess
from pathlib import Path

import pytest

from core.config import build_config
from ui.progress_display import NoOpProgressDisplay

DETECTOR_HEADER = (
    "App,TestClass,TestFilePath,ProductionFilePath,RelativeTestFilePath,"
    "RelativeProductionFilePath,NumberOfMethods,Assertion Roulette,Eager Test"
)


@pytest.fixture
def make_tree(tmp_path):
    """Factory creating empty files under tmp_path from relative paths."""

    def _factory(*relative_paths: str) -> Path:
        for rel in relative_paths:
            file_path = tmp_path / rel
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text("class X {}\n", encoding="utf-8")
        return tmp_path

    return _factory


@pytest.fixture
def java_project(make_tree):
    """A small Maven-style project with two testable classes and one untested class."""
    return make_tree(
        "src/main/java/com/acme/Bar.java",
        "src/main/java/com/acme/Foo.java",
        "src/main/java/com/acme/util/Helper.java",
        "src/test/java/com/acme/FooTest.java",
        "src/test/java/com/acme/util/TestHelper.java",
        "src/test/java/com/acme/BazTest.java",
        "src/test/java/com/acme/Fixtures.java",
    )


@pytest.fixture
def fake_jar(tmp_path):
    """An empty file standing in for TestSmellDetector.jar."""
    jar = tmp_path / "vendor" / "TestSmellDetector.jar"
    jar.parent.mkdir(parents=True, exist_ok=True)
    jar.write_bytes(b"PK\x03\x04")
    return jar


@pytest.fixture
def project_config(java_project, fake_jar):
    """A resolved config for `java_project` using the fake jar."""
    return build_config(
        java_project,
        detector=fake_jar,
        app_name="acme",
        settings={},
    )


@pytest.fixture
def fake_run_factory():
    """
    Factory for subprocess.run replacements that mimic the detector.

    The fake records its calls, writes `output` (if given) as a detector output
    file in the working directory and returns `returncode`.
    """

    def _factory(output: str | None = None, returncode: int = 0, stdout: str = ""):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            if output is not None:
                out_file = Path(kwargs["cwd"]) / "Output_TestSmellDetection_1700000000.csv"
                out_file.write_text(output, encoding="utf-8")
            return subprocess.CompletedProcess(cmd, returncode, stdout=stdout)

        fake_run.calls = calls
        return fake_run

    return _factory


@pytest.fixture
def progress_display():
    """Progress display for testing."""
    return NoOpProgressDisplay()


@pytest.fixture
def detector_header():
    return DETECTOR_HEADER
