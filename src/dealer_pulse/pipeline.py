"""Import orchestration: text -> rows -> header -> report type -> records -> upsert."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from dealer_pulse.config import Settings
from dealer_pulse.errors import EmptyPayloadError, PersistenceError, UnrecognizedFormatError
from dealer_pulse.ingest.classifier import classify_header
from dealer_pulse.ingest.header import locate_header
from dealer_pulse.ingest.payload import UpsertPayload, build_upsert_payload
from dealer_pulse.ingest.registry import MapperRegistry
from dealer_pulse.ingest.tokenizer import build_raw_row, split_rows
from dealer_pulse.models.records import CanonicalRecord, ReportType
from dealer_pulse.store.base import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class ParsedReport:
    """A classified report and the records mapped from it."""

    report_type: ReportType
    header_index: int
    columns: list[str]
    rows_read: int
    records: list[CanonicalRecord] = field(default_factory=list)

    @property
    def rows_dropped(self) -> int:
        return self.rows_read - len(self.records)


@dataclass
class ImportResult:
    """Outcome of a successful import."""

    report_type: ReportType
    table: str
    rows_read: int
    records: list[CanonicalRecord]
    upserted: int


def detect_report(text: str, settings: Optional[Settings] = None) -> tuple[ReportType, int, list[str], list[list[str]]]:
    """
    Tokenize and classify without mapping rows.
    Returns (report_type, header_index, columns, rows). Raises UnrecognizedFormatError.
    """
    settings = settings or Settings()
    rows = split_rows(text)
    header_index = locate_header(rows, limit=settings.header_scan_limit)
    if header_index is None:
        raise UnrecognizedFormatError(
            f"Unknown file format: no recognizable header in the first {settings.header_scan_limit} rows. "
            "Please check the CSV headers."
        )
    columns = rows[header_index]
    report_type = classify_header(columns)
    logger.info("Detected %s report (header at row %d)", report_type.value, header_index)
    return report_type, header_index, columns, rows


def parse_report(text: str, settings: Optional[Settings] = None) -> ParsedReport:
    """
    Parse and map a whole report in memory. No persistence.
    Raises UnrecognizedFormatError or EmptyPayloadError.
    """
    settings = settings or Settings()
    report_type, header_index, columns, rows = detect_report(text, settings)
    raw_rows = [
        build_raw_row(columns, fields, line_number=header_index + offset + 1)
        for offset, fields in enumerate(rows[header_index + 1 :], start=1)
    ]
    mapper = MapperRegistry.get(report_type, day_first=settings.day_first)
    records = mapper.map_rows(raw_rows)
    if not records:
        raise EmptyPayloadError(
            f"Detected a {report_type.value} report but no rows had a "
            f"{mapper.record_cls.key_field}; nothing to import.",
            report_type=report_type.value,
        )
    return ParsedReport(
        report_type=report_type,
        header_index=header_index,
        columns=columns,
        rows_read=len(raw_rows),
        records=records,
    )


def persist(payload: UpsertPayload, store: RecordStore) -> int:
    """Hand a payload to the store. Any store failure becomes PersistenceError."""
    try:
        written = store.upsert(payload.table, payload.records, payload.conflict_key)
    except Exception as e:
        logger.warning("Upsert into %s failed: %s", payload.table, e)
        raise PersistenceError(f"Could not save {payload.table}: {e}") from e
    logger.info("Upserted %d record(s) into %s", written, payload.table)
    return written


def import_report(text: str, store: RecordStore, settings: Optional[Settings] = None) -> ImportResult:
    """
    Import one report into the store. The file is parsed fully before the single
    upsert call; any failure aborts the import with an IngestError subclass.
    """
    parsed = parse_report(text, settings)
    payload = build_upsert_payload(parsed.records)
    upserted = persist(payload, store)
    return ImportResult(
        report_type=parsed.report_type,
        table=payload.table,
        rows_read=parsed.rows_read,
        records=parsed.records,
        upserted=upserted,
    )
