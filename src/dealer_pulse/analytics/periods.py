"""Month bucket arithmetic."""

import re
from datetime import date

_MONTH = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month(month: str) -> date:
    """First day of a yyyy-mm month. Raises ValueError on bad input."""
    match = _MONTH.match(month.strip())
    if not match:
        raise ValueError(f"Invalid month {month!r}; expected YYYY-MM")
    return date(int(match.group(1)), int(match.group(2)), 1)


def previous_month(month: str) -> str:
    """Month before the given one ("2024-01" -> "2023-12")."""
    d = parse_month(month)
    if d.month == 1:
        return f"{d.year - 1}-12"
    return f"{d.year}-{d.month - 1:02d}"


def same_month_last_year(month: str) -> str:
    """Same month one year earlier."""
    d = parse_month(month)
    return f"{d.year - 1}-{d.month:02d}"


def baseline_month(month: str, compare: str = "mom") -> str:
    """Baseline month for a comparison: 'mom' (previous month) or 'yoy'."""
    if compare == "mom":
        return previous_month(month)
    if compare == "yoy":
        return same_month_last_year(month)
    raise ValueError(f"Unknown comparison: {compare}. Use 'mom' or 'yoy'")
