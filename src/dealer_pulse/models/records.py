"""Canonical record models, one per report type."""

from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict


class ReportType(str, Enum):
    """Report families exported by the dealer-management system."""

    LEADS = "leads"
    OPPORTUNITIES = "opportunities"
    SALES = "sales"
    INVENTORY = "inventory"
    UNKNOWN = "unknown"


class CanonicalRecord(BaseModel):
    """
    Base for persisted records.
    Subclasses declare the report type they come from, the table they are
    stored in and the natural-key field used as the upsert conflict target.
    """

    model_config = ConfigDict(frozen=True)

    report_type: ClassVar[ReportType] = ReportType.UNKNOWN
    table: ClassVar[str] = ""
    key_field: ClassVar[str] = ""

    @property
    def natural_key(self) -> str:
        """Business identifier used for deduplication."""
        return str(getattr(self, self.key_field) or "")

    def to_row(self) -> dict:
        """Plain dict in table column order, ready for the store."""
        return self.model_dump(mode="json")


class LeadRecord(CanonicalRecord):
    """Marketing lead (ListofLeads export)."""

    report_type: ClassVar[ReportType] = ReportType.LEADS
    table: ClassVar[str] = "leads_marketing"
    key_field: ClassVar[str] = "lead_id"

    lead_id: str
    name: str = ""
    phone: str = ""
    city: str = ""
    state: str = ""
    status: str = ""
    source: str = "Unknown"
    model: str = ""
    owner: str = ""
    created_on: Optional[str] = None
    month: Optional[str] = None


class OpportunityRecord(CanonicalRecord):
    """Sales opportunity (ListofOpportunities export)."""

    report_type: ClassVar[ReportType] = ReportType.OPPORTUNITIES
    table: ClassVar[str] = "opportunities"
    key_field: ClassVar[str] = "id"

    id: str
    customer: str = ""
    phone: str = ""
    status: str = ""
    model: str = ""
    assigned_to: str = ""
    test_drive_completed: bool = False
    rating: str = ""
    offline_score: Optional[int] = None
    created_on: Optional[str] = None
    month: Optional[str] = None

    def is_hot(self, score_threshold: int = 80) -> bool:
        """Hot if rated 'hot' or scored above the threshold."""
        if "hot" in self.rating.lower():
            return True
        return self.offline_score is not None and self.offline_score > score_threshold


class SaleRecord(CanonicalRecord):
    """Booking-to-delivery register entry."""

    report_type: ClassVar[ReportType] = ReportType.SALES
    table: ClassVar[str] = "sales_register"
    key_field: ClassVar[str] = "order_id"

    order_id: str
    vin: str = ""
    customer: str = ""
    model: str = ""
    booking_date: Optional[str] = None
    invoice_date: Optional[str] = None
    delivery_date: Optional[str] = None
    status: str = ""
    finance_bank: str = ""
    insurance_co: str = ""
    month: Optional[str] = None  # from delivery_date


class InventoryRecord(CanonicalRecord):
    """Vehicle in stock."""

    report_type: ClassVar[ReportType] = ReportType.INVENTORY
    table: ClassVar[str] = "inventory"
    key_field: ClassVar[str] = "vin"

    vin: str
    model: str = ""
    variant: str = ""
    color: str = ""
    ageing_days: int = 0
    status: str = ""
    location: str = ""

    def is_aged(self, days: int = 90) -> bool:
        """True when the vehicle has been in stock longer than `days`."""
        return self.ageing_days > days


RECORD_TYPES: dict[ReportType, type[CanonicalRecord]] = {
    ReportType.LEADS: LeadRecord,
    ReportType.OPPORTUNITIES: OpportunityRecord,
    ReportType.SALES: SaleRecord,
    ReportType.INVENTORY: InventoryRecord,
}
