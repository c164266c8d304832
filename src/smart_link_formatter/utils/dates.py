"""Date, duration and timestamp helpers used by clients and templates."""

import calendar
import re
from datetime import datetime

_DATE_FORMATS = (
    "%Y%m%d",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

# Longest tokens first so "MMMM" wins over "MM" and "M".
_MOMENT_TOKENS = re.compile(
    r"\[([^\]]*)\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|H|hh|h|mm|m|ss|s|A|a"
)

_COMPOUND_SECONDS = re.compile(r"^(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s?)?$")


def parse_date(value: str | None) -> datetime | None:
    """
    Parse the date formats that clients produce.

    Accepts compact ``YYYYMMDD``, ``YYYY/MM/DD``, ISO 8601 and long English
    forms such as ``January 5, 2024``.

    Returns:
        Parsed datetime, or None if the value is not a recognisable date
    """
    if not value:
        return None
    text = value.strip()

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: str) -> str:
    """Format a date string as YYYY/MM/DD, returning the input if it does not parse."""
    parsed = parse_date(value)
    if parsed is None:
        return value
    return f"{parsed.year:04d}/{parsed.month:02d}/{parsed.day:02d}"


def render_date(value: datetime, fmt: str) -> str:
    """
    Render a datetime with a user-supplied format.

    Formats containing ``%`` are passed to ``strftime``. Anything else is read
    as moment-style tokens (``YYYY-MM-DD``, ``MMM D, YYYY``, ``HH:mm``...), with
    ``[...]`` for literal text.
    """
    if "%" in fmt:
        return value.strftime(fmt)

    def replace(match: re.Match[str]) -> str:
        literal = match.group(1)
        if literal is not None:
            return literal
        token = match.group(0)
        hour12 = value.hour % 12 or 12
        return {
            "YYYY": f"{value.year:04d}",
            "YY": f"{value.year % 100:02d}",
            "MMMM": calendar.month_name[value.month],
            "MMM": calendar.month_abbr[value.month],
            "MM": f"{value.month:02d}",
            "M": str(value.month),
            "DD": f"{value.day:02d}",
            "D": str(value.day),
            "dddd": calendar.day_name[value.weekday()],
            "ddd": calendar.day_abbr[value.weekday()],
            "HH": f"{value.hour:02d}",
            "H": str(value.hour),
            "hh": f"{hour12:02d}",
            "h": str(hour12),
            "mm": f"{value.minute:02d}",
            "m": str(value.minute),
            "ss": f"{value.second:02d}",
            "s": str(value.second),
            "A": "AM" if value.hour < 12 else "PM",
            "a": "am" if value.hour < 12 else "pm",
        }[token]

    return _MOMENT_TOKENS.sub(replace, fmt)


def format_duration(total_seconds: int) -> str:
    """
    Format a duration in seconds as H:MM:SS, or M:SS under an hour.

    Args:
        total_seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    hours, remainder = divmod(int(total_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def parse_timestamp_seconds(value: str | None) -> int:
    """
    Read a video start offset such as ``90``, ``90s`` or ``1h2m3s``.

    Returns:
        Offset in seconds, 0 when absent or unparsable
    """
    if not value:
        return 0
    match = _COMPOUND_SECONDS.match(value.strip().lower())
    if not match:
        return 0
    hours, minutes, seconds = (int(group) if group else 0 for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def format_timestamp(total_seconds: int) -> str:
    """Format an offset as ``@H:MM:SS``/``@M:SS``; zero yields an empty string."""
    if total_seconds <= 0:
        return ""
    return f"@{format_duration(total_seconds)}"
