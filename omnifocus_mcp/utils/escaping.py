"""
AppleScript literal helpers.

Every value that ends up inside a generated AppleScript goes through this
module. Scripts are passed to osascript on stdin, so only AppleScript's own
string syntax needs escaping (backslash and double quote).
"""

from datetime import datetime

from omnifocus_mcp.dates import parse_iso_datetime


def _escape_applescript(value: str) -> str:
    """Escape backslashes and double quotes for use inside an AppleScript string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _quote_applescript(value: str) -> str:
    """Return value as a double-quoted AppleScript string literal."""
    return f'"{_escape_applescript(value)}"'


def _applescript_list(values: list[str] | None) -> str:
    """Return an AppleScript list literal of strings, e.g. {"a", "b"}."""
    return "{" + ", ".join(_quote_applescript(v) for v in values or []) + "}"


def _applescript_bool(value: bool) -> str:
    return "true" if value else "false"


def _applescript_date(value: str | datetime) -> str:
    """
    Return an expression that builds a local date from an ISO string.

    The expression calls the makeDate handler that every generated script
    defines, so no locale-dependent `date "..."` coercion is involved.

    Raises:
        ValueError: If value is a string that is not a valid ISO date
    """
    dt = parse_iso_datetime(value) if isinstance(value, str) else value
    seconds = dt.hour * 3600 + dt.minute * 60 + dt.second
    return f"my makeDate({dt.year}, {dt.month}, {dt.day}, {seconds})"
