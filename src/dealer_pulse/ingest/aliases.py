"""Column aliases per canonical field, by report type.

Each list is ordered by preference. The canonical field name itself is always
tried first by the resolver, so it is not repeated here. Update SCHEMA_VERSION
whenever a canonical field set changes.
"""

from dealer_pulse.models.records import ReportType

SCHEMA_VERSION = "2"

LEAD_ALIASES: dict[str, list[str]] = {
    "lead_id": ["Lead ID", "Lead Id", "LeadID", "Lead No."],
    "name": ["Name", "Customer Name", "Lead Name"],
    "phone": ["Customer Phone", "Phone", "Mobile No.", "Mobile Number", "Mobile"],
    "city": ["City"],
    "state": ["State", "Region"],
    "status": ["Status", "Lead Status"],
    "source": ["Source", "Lead Source", "Enquiry Source"],
    "model": ["Model Line(FE)", "Model Line", "Model"],
    "owner": ["Owner", "Lead Owner"],
    "created_on": ["Created On", "Created Date", "Creation Date"],
}

OPPORTUNITY_ALIASES: dict[str, list[str]] = {
    "id": ["ID", "Opportunity ID", "Opportunity Id", "Opportunity No."],
    "customer": ["Customer", "Customer Name"],
    "phone": ["Mobile No.", "Customer Phone", "Phone", "Mobile"],
    "status": ["Status", "Opportunity Status"],
    "model": ["Model Line(FE)", "Model Line", "Model"],
    "assigned_to": ["Assigned To", "Sales Consultant", "Owner"],
    "test_drive_completed": ["Test Drive Completed", "Test Drive Status", "Test Drive"],
    "rating": ["ZQualificationLevel", "Qualification Level", "Rating"],
    "offline_score": ["Opportunity offline score", "Offline Score", "Score"],
    "created_on": ["Created On", "Created Date", "Creation Date"],
}

SALE_ALIASES: dict[str, list[str]] = {
    "order_id": ["Order Number", "Order No.", "Order ID", "Booking Number"],
    "vin": ["Vehicle ID No.", "VIN", "Vehicle Identification Number", "Chassis No."],
    "customer": ["Customer Name", "Customer"],
    "model": ["Model Sales Code", "Model Line", "Model"],
    "booking_date": ["Document Date", "Booking Date", "Order Date"],
    "invoice_date": ["Billing Date", "Invoice Date"],
    "delivery_date": ["Delivery Date", "Retail Date"],
    "status": ["Status", "Order Status"],
    "finance_bank": ["Financier Name", "Finance Bank", "Financier", "Bank Name"],
    "insurance_co": ["Insurance Company Name", "Insurance Company", "Insurer"],
}

INVENTORY_ALIASES: dict[str, list[str]] = {
    "vin": ["Vehicle Identification Number", "VIN", "Vehicle ID No.", "Chassis No."],
    "model": ["Model Line", "Model"],
    "variant": ["Variant Series", "Variant"],
    "color": ["Color Description", "Colour Description", "Color", "Colour"],
    "ageing_days": ["Ageing Days", "Ageing", "Age (Days)", "Stock Age"],
    "status": ["Primary Status", "Status"],
    "location": ["Storage Location", "Location"],
}

FIELD_ALIASES: dict[ReportType, dict[str, list[str]]] = {
    ReportType.LEADS: LEAD_ALIASES,
    ReportType.OPPORTUNITIES: OPPORTUNITY_ALIASES,
    ReportType.SALES: SALE_ALIASES,
    ReportType.INVENTORY: INVENTORY_ALIASES,
}
