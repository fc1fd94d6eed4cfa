# Timestamp helpers shared by the dashboard and the order sort.
from datetime import datetime
from typing import Optional

# Fixed English abbreviations so labels don't depend on the process locale
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

INVALID_DATE_LABEL = "Invalid Date"


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime into local time.
    Naive values (including date-only strings) are taken as local already,
    offset-aware ones are converted to the local zone.
    Returns None when the value cannot be parsed or has no local representation.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        s = value.strip()
        if s[-1] in "Zz":
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is not None:
        try:
            dt = dt.astimezone()
        except (OverflowError, OSError):
            # valid ISO value whose local time falls outside the datetime range
            return None
    return dt


def month_label(dt: datetime) -> str:
    return f"{MONTH_ABBR[dt.month - 1]} {dt.year:04d}"
