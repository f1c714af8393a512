"""
General utility functions for the CLI application.
"""

from rich.console import Console
from rich.markup import escape

console: Console = Console()


def debug(
    *values: object,
    sep: str = " ",
    end: str = "\n",
) -> None:
    """
    Print debug message with orange bold formatting.

    Used for verbose output: generated input lines and the detector's own output.
    Values are escaped so paths and detector output containing square brackets
    are printed as-is.

    Args:
        *values: Variable number of objects to print. All values are converted to strings.
        sep: Separator string between values. Defaults to a single space.
        end: String appended after the last value. Defaults to newline.
    """
    if not values:
        print(end=end)
        return

    message = sep.join(str(v) for v in values)
    console.print(f"DEBUG: {escape(message)}", end=end, style="orange1")
