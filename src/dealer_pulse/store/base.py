"""Persistence interface used by the import pipeline."""

from typing import Optional, Protocol, runtime_checkable

from dealer_pulse.models.records import RECORD_TYPES

# Table name -> natural-key column declared as the upsert conflict target
TABLE_KEYS: dict[str, str] = {cls.table: cls.key_field for cls in RECORD_TYPES.values()}


@runtime_checkable
class RecordStore(Protocol):
    """Upsert-capable table service."""

    def upsert(self, table: str, records: list[dict], conflict_key: str) -> int:
        """Insert or update records keyed by conflict_key. Returns rows written."""
        ...

    def fetch(self, table: str, month: Optional[str] = None) -> list[dict]:
        """Return stored rows, optionally only those in a yyyy-mm month bucket."""
        ...


def check_table(table: str, conflict_key: str) -> None:
    """Raise ValueError unless table is known and conflict_key is its declared key."""
    expected = TABLE_KEYS.get(table)
    if expected is None:
        raise ValueError(f"Unknown table: {table}. Available: {list(TABLE_KEYS.keys())}")
    if conflict_key != expected:
        raise ValueError(f"Conflict key for {table} must be {expected!r}, got {conflict_key!r}")
