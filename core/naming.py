"""
Naming conventions that link test classes to production classes.

Test classes are recognised purely by their file names. A test named
`TestFoo`, `FooTest`, `FooTests` or `FooTestCase` is assumed to exercise the
production class `Foo`. All conventions are checked independently, so a single
test name may yield several candidates (e.g. "TestFooTest" -> {"FooTest", "TestFoo"}).
"""

from pathlib import Path

from constants import TEST_PREFIX, TEST_SUFFIXES
from models import ClassKind


def simple_name(path: Path) -> str:
    """Return the file name without directory and final extension."""
    return path.stem


def is_test_name(name: str) -> bool:
    """
    Tell whether a simple name follows one of the test naming conventions.

    Args:
        name: A simple name such as "FooTest".

    Returns:
        bool: True if the name starts with "Test" or ends with "Test",
            "Tests" or "TestCase".
    """
    return name.startswith(TEST_PREFIX) or name.endswith(TEST_SUFFIXES)


def classify(path: Path) -> ClassKind:
    """Classify a source file as TEST or PRODUCTION from its simple name."""
    return ClassKind.TEST if is_test_name(simple_name(path)) else ClassKind.PRODUCTION


def derive_candidate_names(test_simple_name: str) -> set[str]:
    """
    Derive the production class names a test class could be exercising.

    Every applicable convention contributes one candidate:

    - "Test" prefix stripped ("TestFoo" -> "Foo")
    - "Test" suffix stripped ("FooTest" -> "Foo")
    - "Tests" suffix stripped ("FooTests" -> "Foo")
    - "TestCase" suffix stripped ("FooTestCase" -> "Foo")

    Args:
        test_simple_name: Simple name of the test class.

    Returns:
        set[str]: Candidate production names. Empty when no convention
            applies, in which case the test cannot be paired.
    """
    names: set[str] = set()

    if test_simple_name.startswith(TEST_PREFIX):
        names.add(test_simple_name[len(TEST_PREFIX) :])

    for suffix in TEST_SUFFIXES:
        if test_simple_name.endswith(suffix):
            names.add(test_simple_name[: -len(suffix)])

    return names
