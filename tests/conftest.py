"""Pytest fixtures for dealer-pulse tests."""

import tempfile
from pathlib import Path

import pytest

from dealer_pulse.store import SQLiteRecordStore

LEADS_CSV = (
    "List of Leads Created in Marketing\n"
    "Dealer: Sunrise Motors\n"
    "Period: 01.03.2024 - 31.03.2024\n"
    "Lead ID,Name,Customer Phone,City,State,Status,Source,Model Line(FE),Owner,Created On\n"
    "L-001,\"Smith, John\",9876500001,Pune,MH,Open,Walk-in,Nexon,Asha,03/15/2024 10:42 AM\n"
    "L-002,Priya Rao,9876500002,Mumbai,MH,Qualified,Website,Harrier,Asha,03/18/2024\n"
    ",No Id,9876500003,Pune,MH,Open,Website,Nexon,Ravi,03/19/2024\n"
    "L-003,Arjun Mehta,9876500004,Nashik,MH,Lost,,Punch,Ravi,02/27/2024\n"
)

OPPORTUNITIES_CSV = (
    "Opportunities Report\n"
    "\n"
    "ID,Customer,Mobile No.,Status,Model Line(FE),Test Drive Completed,ZQualificationLevel,"
    "Opportunity offline score,Order Number,Assigned To,Created On\n"
    "OP-1,Smith John,9876500001,Open,Nexon,Yes,Hot,92,,Asha,03/02/2024\n"
    "OP-2,Priya Rao,9876500002,Open,Harrier,no,Warm,40,,Asha,03/05/2024\n"
    "OP-3,Arjun Mehta,9876500004,Booked,Punch,COMPLETED,Cold,85,ORD-9,Ravi,02/11/2024\n"
)

SALES_CSV = (
    "Dealer Code,Order Type,Order Number,Customer Name,Model Sales Code,Vehicle ID No.,"
    "Document Date,Billing Date,Delivery Date,Status,Financier Name,Insurance Company Name\n"
    "D01,Retail,ORD-1,Smith John,NXN-XZ,MAT111,03/01/2024,03/10/2024,03/12/2024,Delivered,HDFC Bank,ICICI Lombard\n"
    "D01,Retail,ORD-2,Priya Rao,HRR-XT,MAT222,02/20/2024,,,Booked,,\n"
    "D01,Retail,,Walk In,PNC-AC,MAT333,03/03/2024,,03/25/2024,Delivered,SBI,\n"
    "D01,Retail,,,PNC-AC,,03/04/2024,,,Cancelled,,\n"
)

INVENTORY_CSV = (
    "VIN,Model Line,Ageing Days,Primary Status\n"
    "ABC123,Nexon,45,In Stock\n"
    ",Harrier,10,In Transit\n"
    "XYZ999,Punch,120,In Stock\n"
)


@pytest.fixture
def leads_csv() -> str:
    """Leads export with three banner rows before the header."""
    return LEADS_CSV


@pytest.fixture
def opportunities_csv() -> str:
    """Opportunities export with a banner and a blank separator row."""
    return OPPORTUNITIES_CSV


@pytest.fixture
def sales_csv() -> str:
    """Booking-to-delivery register."""
    return SALES_CSV


@pytest.fixture
def inventory_csv() -> str:
    """Three-row inventory export, one row without VIN."""
    return INVENTORY_CSV


@pytest.fixture
def temp_db() -> Path:
    """Temporary database path for isolated tests."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def store(temp_db: Path) -> SQLiteRecordStore:
    """SQLiteRecordStore with temporary database."""
    return SQLiteRecordStore(temp_db)
