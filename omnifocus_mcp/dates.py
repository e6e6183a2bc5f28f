"""ISO 8601 date parsing shared by input validation and script generation."""

from datetime import datetime


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO 8601 date or datetime string.

    Accepts 'YYYY-MM-DD', 'YYYY-MM-DDTHH:MM[:SS]' and a trailing 'Z' or offset.
    Aware values are converted to naive local time, since OmniFocus dates are
    set in the user's time zone.

    Raises:
        ValueError: If the string is not a valid ISO date
    """
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError(f"Invalid ISO date: '{value}' (expected YYYY-MM-DD or full ISO date)") from None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
