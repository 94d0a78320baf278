"""Split uploaded report text into rows and fields."""

import csv
from io import StringIO
from typing import Iterable

from dealer_pulse.models.raw import RawRow

DELIMITER = ","


def split_rows(text: str, delimiter: str = DELIMITER) -> list[list[str]]:
    """
    Parse report text into trimmed field lists, skipping blank rows.
    Quoted fields may hold the delimiter, newlines and doubled quotes.
    Accepts \\r\\n or \\n line endings and a leading UTF-8 BOM.
    """
    if not text:
        return []
    text = text.lstrip("\ufeff")
    reader = csv.reader(StringIO(text, newline=""), delimiter=delimiter, skipinitialspace=True)
    rows: list[list[str]] = []
    for fields in reader:
        cleaned = [f.strip() for f in fields]
        if any(cleaned):
            rows.append(cleaned)
    return rows


def split_fields(line: str, delimiter: str = DELIMITER) -> list[str]:
    """Split a single row string on unquoted delimiters."""
    rows = split_rows(line, delimiter)
    return rows[0] if rows else []


def row_text(fields: Iterable[str]) -> str:
    """Rejoin fields into one lowercase line for keyword matching."""
    return DELIMITER.join(fields).lower()


def build_raw_row(headers: list[str], fields: list[str], line_number: int = 0) -> RawRow:
    """
    Pair header cells with row values.
    Short rows are padded with empty strings, surplus fields are dropped,
    blank header cells are skipped and the first of duplicate headers wins.
    """
    data: dict[str, str] = {}
    for i, header in enumerate(headers):
        if not header or header in data:
            continue
        data[header] = fields[i] if i < len(fields) else ""
    return RawRow(data=data, line_number=line_number)
