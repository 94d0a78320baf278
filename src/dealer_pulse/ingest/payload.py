"""Upsert payloads keyed by natural key."""

from dataclasses import dataclass, field
from typing import Sequence

from dealer_pulse.models.records import CanonicalRecord, ReportType


@dataclass
class UpsertPayload:
    """Rows for one table plus the column the store must treat as unique."""

    report_type: ReportType
    table: str
    conflict_key: str
    records: list[dict] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


def build_upsert_payload(records: Sequence[CanonicalRecord]) -> UpsertPayload:
    """
    Deduplicate records by natural key; the last one in input order wins.
    All records must be of the same type.
    """
    if not records:
        raise ValueError("Cannot build a payload from zero records")
    record_cls = type(records[0])
    by_key: dict[str, dict] = {}
    for record in records:
        if type(record) is not record_cls:
            raise ValueError(
                f"Mixed record types in one payload: {record_cls.__name__} and {type(record).__name__}"
            )
        by_key[record.natural_key] = record.to_row()
    return UpsertPayload(
        report_type=record_cls.report_type,
        table=record_cls.table,
        conflict_key=record_cls.key_field,
        records=list(by_key.values()),
    )
