"""Target date parsing and forecast day-offset utilities."""
from datetime import date, datetime, timedelta

# Index of the last day in a 5-day forecast
MAX_DAY_OFFSET = 4

RELATIVE_DAYS = {
    "today": 0,
    "tomorrow": 1,
}


def parse_target_date(s: str, today: date) -> datetime:
    """
    Parse a requested spraying date into a datetime.

    Supports:
    - Relative tokens: "today", "tomorrow" (midnight of that day)
    - ISO date: "2025-07-08" (midnight)
    - ISO datetime, with or without offset: "2025-07-08T19:00", "2025-07-08T19:00:00Z"
    - Space-separated datetime: "2025-07-08 19:00"

    The hour of the returned value is the hour the caller asked about; it is
    never taken from the wall clock.

    Args:
        s: Date string
        today: The current calendar day

    Returns:
        datetime object (naive for relative tokens and plain dates)

    Raises:
        ValueError: If the date cannot be parsed
    """
    if not s or not s.strip():
        raise ValueError("Empty date string")

    s = s.strip()
    token = s.lower()
    if token in RELATIVE_DAYS:
        day = today + timedelta(days=RELATIVE_DAYS[token])
        return datetime(day.year, day.month, day.day)

    # Convert trailing "Z" to "+00:00" for ISO format compatibility
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(s)
    except ValueError:
        pass

    if " " in s and "T" not in s:
        try:
            return datetime.fromisoformat(s.replace(" ", "T"))
        except ValueError:
            pass

    raise ValueError(
        f"Unable to parse date: {s}. Expected 'today', 'tomorrow' or ISO format (e.g., '2025-07-08')"
    )


def resolve_day_offset(target: date, today: date) -> int:
    """Zero-based forecast index for ``target``, clamped to [0, MAX_DAY_OFFSET]."""
    offset = (target - today).days
    if offset < 0:
        # No backward-looking forecasts
        return 0
    return min(offset, MAX_DAY_OFFSET)
