"""Data models for raw rows and canonical dealership records."""

from dealer_pulse.models.raw import RawRow
from dealer_pulse.models.records import (
    RECORD_TYPES,
    CanonicalRecord,
    InventoryRecord,
    LeadRecord,
    OpportunityRecord,
    ReportType,
    SaleRecord,
)

__all__ = [
    "RECORD_TYPES",
    "CanonicalRecord",
    "InventoryRecord",
    "LeadRecord",
    "OpportunityRecord",
    "RawRow",
    "ReportType",
    "SaleRecord",
]
