"""Utility helper functions."""

from datetime import datetime, date, time
from urllib.parse import urlparse

# Accepted spellings of a time of day, 12-hour forms first
TIME_INPUT_FORMATS = ("%I:%M %p", "%I:%M%p", "%H:%M", "%H:%M:%S")

# Storage form of a time of day in the database
TIME_STORAGE_FORMAT = "%H:%M"


def parse_time(value):
    """Parse a time of day written as "h:mm AM/PM" or "H:mm".

    Raises:
        ValueError: if the value matches none of the accepted formats.
    """
    if isinstance(value, time):
        return value
    if isinstance(value, datetime):
        return value.time()
    text = " ".join(str(value or "").split()).upper()
    for fmt in TIME_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised time of day: {value!r}")


def display_time(value):
    """Format a time of day as "2:30 PM"."""
    value = parse_time(value)
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def storage_time(value):
    """Format a time of day the way timeslot rows store it."""
    return parse_time(value).strftime(TIME_STORAGE_FORMAT)


def display_date(value):
    """Format a date as e.g. "Fri, 3 May 2024"; unparseable input is returned as-is."""
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        try:
            value = datetime.strptime(str(value), "%Y-%m-%d").date()
        except ValueError:
            return value
    return f"{value.strftime('%a')}, {value.day} {value.strftime('%b %Y')}"


def format_price(value):
    """Format a menu price with two decimals."""
    try:
        return f"${float(value):,.2f}"
    except (TypeError, ValueError):
        return value


def safe_referrer(referrer, host_url, default="/"):
    """Return the referrer if it points back at this site, otherwise the default."""
    if not referrer:
        return default
    parsed = urlparse(referrer)
    own = urlparse(host_url)
    if parsed.scheme not in ("http", "https", ""):
        return default
    if parsed.netloc and parsed.netloc != own.netloc:
        return default
    path = parsed.path or "/"
    if not path.startswith("/") or path.startswith("//"):
        return default
    if parsed.query:
        path = f"{path}?{parsed.query}"
    return path
