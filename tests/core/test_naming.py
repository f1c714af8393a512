"""
Tests for the naming conventions module.

Tests cover:
- derive_candidate_names: every convention, overlapping conventions, no match
- is_test_name / classify: the test class predicate
- simple_name: extension and directory stripping
"""

from pathlib import Path

import pytest

from core.naming import classify, derive_candidate_names, is_test_name, simple_name
from models import ClassKind


# ============================================================================
# Tests for derive_candidate_names
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "test_name",
    ["TestFoo", "FooTest", "FooTests", "FooTestCase"],
)
def test_derive_candidate_names_each_convention_yields_production_name(test_name):
    """Every naming convention should lead back to the production class."""
    assert "Foo" in derive_candidate_names(test_name)


@pytest.mark.unit
def test_derive_candidate_names_no_convention_returns_empty_set():
    """A name following no convention cannot be paired."""
    assert derive_candidate_names("Unrelated") == set()


@pytest.mark.unit
def test_derive_candidate_names_prefix_and_suffix_are_unioned():
    """All applicable conventions contribute a candidate."""
    assert derive_candidate_names("TestFooTest") == {"FooTest", "TestFoo"}


@pytest.mark.unit
def test_derive_candidate_names_tests_suffix_also_matches_test_prefix():
    """'TestUtilsTests' satisfies the prefix and the 'Tests' suffix."""
    assert derive_candidate_names("TestUtilsTests") == {"UtilsTests", "TestUtils"}


@pytest.mark.unit
def test_derive_candidate_names_is_case_sensitive():
    """Conventions are literal: 'testFoo' and 'FooTEST' are not tests."""
    assert derive_candidate_names("testFoo") == set()
    assert derive_candidate_names("FooTEST") == set()


@pytest.mark.unit
def test_derive_candidate_names_is_pure():
    """Identical input yields identical output and the result is a fresh set."""
    first = derive_candidate_names("FooTestCase")
    first.add("Mutated")
    second = derive_candidate_names("FooTestCase")

    assert second == {"Foo"}


@pytest.mark.unit
def test_derive_candidate_names_bare_test_yields_empty_name():
    """'Test' alone strips down to the empty name, which no class can have."""
    assert derive_candidate_names("Test") == {""}


# ============================================================================
# Tests for is_test_name / classify
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,expected",
    [
        ("TestFoo", True),
        ("FooTest", True),
        ("FooTests", True),
        ("FooTestCase", True),
        ("Foo", False),
        ("Testimony", True),
        ("Contest", False),
        ("FooTestHelper", False),
    ],
)
def test_is_test_name(name, expected):
    """is_test_name should recognise the prefix and the three suffixes."""
    assert is_test_name(name) is expected


@pytest.mark.unit
def test_classify_uses_simple_name():
    """classify should look at the file name only, not the directories."""
    assert classify(Path("src/test/java/FooTest.java")) == ClassKind.TEST
    assert classify(Path("src/Test/java/Foo.java")) == ClassKind.PRODUCTION


# ============================================================================
# Tests for simple_name
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "path,expected",
    [
        (Path("src/main/java/com/acme/Foo.java"), "Foo"),
        (Path("Foo.java"), "Foo"),
        (Path("/abs/dir/Foo.Bar.java"), "Foo.Bar"),
    ],
)
def test_simple_name_strips_directory_and_final_extension(path, expected):
    assert simple_name(path) == expected
