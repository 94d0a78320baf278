"""Per-report mappers from raw rows to canonical records."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from dealer_pulse.models.raw import RawRow
from dealer_pulse.models.records import (
    CanonicalRecord,
    InventoryRecord,
    LeadRecord,
    OpportunityRecord,
    ReportType,
    SaleRecord,
)

from .aliases import FIELD_ALIASES
from .dates import month_bucket, normalize_date
from .resolver import FieldResolver

logger = logging.getLogger(__name__)

TEST_DRIVE_DONE = frozenset({"yes", "done", "completed"})
_LEADING_INT = re.compile(r"-?\d+")


def parse_int(value: Optional[str], default: int = 0) -> int:
    """Leading integer of a value ("1,200" -> 1200, "45.7" -> 45), else default."""
    if not value:
        return default
    match = _LEADING_INT.match(value.strip().replace(",", ""))
    return int(match.group()) if match else default


def parse_flag(value: Optional[str]) -> bool:
    """Test-drive style yes/done/completed flag."""
    return (value or "").strip().lower() in TEST_DRIVE_DONE


class BaseMapper(ABC):
    """
    Maps raw rows of one report type to canonical records.
    Rows whose natural key resolves to empty are skipped, not reported as errors.
    """

    report_type: ReportType = ReportType.UNKNOWN
    record_cls: type[CanonicalRecord] = CanonicalRecord

    def __init__(self, day_first: bool = False, resolver: Optional[FieldResolver] = None):
        self.day_first = day_first
        self.resolver = resolver or FieldResolver(FIELD_ALIASES.get(self.report_type, {}))

    def value(self, row: RawRow, field: str) -> str:
        """Resolved value of a canonical field."""
        return self.resolver.resolve(row, field)

    def date(self, row: RawRow, field: str) -> Optional[str]:
        """Resolved value of a date field in yyyy-mm-dd form."""
        return normalize_date(self.value(row, field), day_first=self.day_first)

    def natural_key(self, row: RawRow) -> str:
        """Business identifier of the row; empty means drop."""
        return self.value(row, self.record_cls.key_field).strip()

    @abstractmethod
    def build(self, row: RawRow, key: str) -> CanonicalRecord:
        """Build the record for a row whose natural key is known."""
        pass

    def map_row(self, row: RawRow) -> Optional[CanonicalRecord]:
        """Record for the row, or None when it has no natural key."""
        key = self.natural_key(row)
        if not key:
            return None
        return self.build(row, key)

    def map_rows(self, rows: Iterable[RawRow]) -> list[CanonicalRecord]:
        """Map all rows, dropping those without a natural key."""
        records: list[CanonicalRecord] = []
        dropped = 0
        for row in rows:
            record = self.map_row(row)
            if record is None:
                dropped += 1
                logger.debug("Dropped line %d: no %s", row.line_number, self.record_cls.key_field)
                continue
            records.append(record)
        if dropped:
            logger.info("%s: dropped %d row(s) without a natural key", self.report_type.value, dropped)
        return records


class LeadMapper(BaseMapper):
    """Marketing leads report."""

    report_type = ReportType.LEADS
    record_cls = LeadRecord

    def build(self, row: RawRow, key: str) -> LeadRecord:
        created_on = self.date(row, "created_on")
        return LeadRecord(
            lead_id=key,
            name=self.value(row, "name"),
            phone=self.value(row, "phone"),
            city=self.value(row, "city"),
            state=self.value(row, "state"),
            status=self.value(row, "status"),
            source=self.value(row, "source") or "Unknown",
            model=self.value(row, "model"),
            owner=self.value(row, "owner"),
            created_on=created_on,
            month=month_bucket(created_on),
        )


class OpportunityMapper(BaseMapper):
    """Opportunities report."""

    report_type = ReportType.OPPORTUNITIES
    record_cls = OpportunityRecord

    def build(self, row: RawRow, key: str) -> OpportunityRecord:
        created_on = self.date(row, "created_on")
        score = self.value(row, "offline_score")
        return OpportunityRecord(
            id=key,
            customer=self.value(row, "customer"),
            phone=self.value(row, "phone"),
            status=self.value(row, "status"),
            model=self.value(row, "model"),
            assigned_to=self.value(row, "assigned_to"),
            test_drive_completed=parse_flag(self.value(row, "test_drive_completed")),
            rating=self.value(row, "rating"),
            offline_score=parse_int(score) if score else None,
            created_on=created_on,
            month=month_bucket(created_on),
        )


class SaleMapper(BaseMapper):
    """Booking-to-delivery register. Keyed by order number, falling back to VIN."""

    report_type = ReportType.SALES
    record_cls = SaleRecord

    def natural_key(self, row: RawRow) -> str:
        return (self.value(row, "order_id") or self.value(row, "vin")).strip()

    def build(self, row: RawRow, key: str) -> SaleRecord:
        delivery_date = self.date(row, "delivery_date")
        return SaleRecord(
            order_id=key,
            vin=self.value(row, "vin"),
            customer=self.value(row, "customer"),
            model=self.value(row, "model"),
            booking_date=self.date(row, "booking_date"),
            invoice_date=self.date(row, "invoice_date"),
            delivery_date=delivery_date,
            status=self.value(row, "status"),
            finance_bank=self.value(row, "finance_bank"),
            insurance_co=self.value(row, "insurance_co"),
            month=month_bucket(delivery_date),
        )


class InventoryMapper(BaseMapper):
    """Stock/ageing report."""

    report_type = ReportType.INVENTORY
    record_cls = InventoryRecord

    def build(self, row: RawRow, key: str) -> InventoryRecord:
        return InventoryRecord(
            vin=key,
            model=self.value(row, "model"),
            variant=self.value(row, "variant"),
            color=self.value(row, "color"),
            ageing_days=parse_int(self.value(row, "ageing_days")),
            status=self.value(row, "status"),
            location=self.value(row, "location"),
        )
