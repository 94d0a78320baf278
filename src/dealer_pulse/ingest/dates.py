"""Date normalization for DMS exports that mix US, day-first and ISO dates."""

from datetime import datetime
from typing import Optional

# Slash dates are month-first unless the caller passes day_first: "03/04/2024"
# reads as March 4th. Dash dates come from the booking-to-delivery register and
# are always day-first: "05-03-2024" is 5 March. strptime accepts unpadded day
# and month, which covers d/M/yyyy and M/d/yyyy.
DATE_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y-%m-%d",
    "%d-%m-%Y",
    "%m-%d-%Y",
    "%d.%m.%Y",
    "%Y/%m/%d",
)

_DAY_FIRST_SWAPS = {
    "%m/%d/%Y": "%d/%m/%Y",
    "%d/%m/%Y": "%m/%d/%Y",
}


def date_formats(day_first: bool = False) -> tuple[str, ...]:
    """Formats in the order they are tried."""
    if not day_first:
        return DATE_FORMATS
    return tuple(_DAY_FIRST_SWAPS.get(fmt, fmt) for fmt in DATE_FORMATS)


def parse_date(value: Optional[str], day_first: bool = False) -> Optional[datetime]:
    """Parse the date part of a value, ignoring any trailing time component."""
    if not value or not value.strip():
        return None
    token = value.strip().split()[0].split("T")[0]
    for fmt in date_formats(day_first):
        try:
            return datetime.strptime(token, fmt)
        except ValueError:
            continue
    return None


def normalize_date(value: Optional[str], day_first: bool = False) -> Optional[str]:
    """Canonical yyyy-mm-dd string, or None when no format matches."""
    parsed = parse_date(value, day_first=day_first)
    return parsed.strftime("%Y-%m-%d") if parsed else None


def month_bucket(date: Optional[str]) -> Optional[str]:
    """yyyy-mm bucket of a canonical date."""
    return date[:7] if date else None
