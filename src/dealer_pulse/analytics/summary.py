"""Funnel metrics for a month compared against a baseline month."""

from collections import Counter
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from dealer_pulse.models.records import InventoryRecord, LeadRecord, OpportunityRecord, SaleRecord
from dealer_pulse.store.base import RecordStore

from .periods import baseline_month, parse_month


class MetricComparison(BaseModel):
    """One metric in the current and baseline period."""

    label: str
    current: int = 0
    previous: int = 0

    @property
    def change_pct(self) -> Optional[float]:
        """Percent change against the baseline; None when the baseline is zero."""
        if not self.previous:
            return None
        return round(100 * (self.current - self.previous) / self.previous, 1)


class InventorySnapshot(BaseModel):
    """Stock at the time of the latest inventory import."""

    total: int = 0
    aged: int = 0
    aged_threshold_days: int = 90


class MonthlySummary(BaseModel):
    """Dashboard numbers for one month."""

    month: str
    baseline: str
    compare: str = Field(..., description="mom | yoy")
    metrics: list[MetricComparison] = Field(default_factory=list)
    lead_sources: list[tuple[str, int]] = Field(default_factory=list)
    inventory: InventorySnapshot = Field(default_factory=InventorySnapshot)

    def metric(self, label: str) -> Optional[MetricComparison]:
        """Look up a metric by label."""
        return next((m for m in self.metrics if m.label == label), None)


def _in_month(date: Optional[str], month: str) -> bool:
    return bool(date) and date[:7] == month


def count_inquiries(leads: Iterable[LeadRecord], month: str) -> int:
    return sum(1 for lead in leads if lead.month == month)


def count_test_drives(opps: Iterable[OpportunityRecord], month: str) -> int:
    return sum(1 for o in opps if o.month == month and o.test_drive_completed)


def count_hot_leads(opps: Iterable[OpportunityRecord], month: str) -> int:
    return sum(1 for o in opps if o.month == month and o.is_hot())


def count_bookings(sales: Iterable[SaleRecord], month: str) -> int:
    return sum(1 for s in sales if _in_month(s.booking_date, month))


def count_retails(sales: Iterable[SaleRecord], month: str) -> int:
    return sum(1 for s in sales if _in_month(s.delivery_date, month))


def lead_source_breakdown(leads: Iterable[LeadRecord], month: str) -> list[tuple[str, int]]:
    """(source, count) for the month, most common first."""
    counts = Counter(lead.source for lead in leads if lead.month == month)
    return counts.most_common()


def inventory_snapshot(stock: Iterable[InventoryRecord], aged_days: int = 90) -> InventorySnapshot:
    stock = list(stock)
    return InventorySnapshot(
        total=len(stock),
        aged=sum(1 for v in stock if v.is_aged(aged_days)),
        aged_threshold_days=aged_days,
    )


def build_summary(
    store: RecordStore,
    month: str,
    *,
    compare: str = "mom",
    aged_days: int = 90,
) -> MonthlySummary:
    """
    Read every table back from the store and compute the month's funnel
    (inquiries, test drives, hot leads, bookings, retails) against the baseline.
    """
    parse_month(month)
    baseline = baseline_month(month, compare)

    leads = [LeadRecord.model_validate(r) for r in store.fetch(LeadRecord.table)]
    opps = [OpportunityRecord.model_validate(r) for r in store.fetch(OpportunityRecord.table)]
    sales = [SaleRecord.model_validate(r) for r in store.fetch(SaleRecord.table)]
    stock = [InventoryRecord.model_validate(r) for r in store.fetch(InventoryRecord.table)]

    counters = [
        ("Inquiries", count_inquiries, leads),
        ("Test-drives", count_test_drives, opps),
        ("Hot Leads", count_hot_leads, opps),
        ("Bookings", count_bookings, sales),
        ("Retails", count_retails, sales),
    ]
    metrics = [
        MetricComparison(label=label, current=fn(records, month), previous=fn(records, baseline))
        for label, fn, records in counters
    ]
    return MonthlySummary(
        month=month,
        baseline=baseline,
        compare=compare,
        metrics=metrics,
        lead_sources=lead_source_breakdown(leads, month),
        inventory=inventory_snapshot(stock, aged_days),
    )
