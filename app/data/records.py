"""Pydantic record models, one per module table."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def _isoformat(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _iso_day(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()[:10]
    return value


# Timestamps and dates stay ISO strings, as PostgREST returns them.
Timestamp = Annotated[Optional[str], BeforeValidator(_isoformat)]
Day = Annotated[Optional[str], BeforeValidator(_iso_day)]


class BaseRecord(BaseModel):
    """Fields every record carries. Unknown columns are ignored."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    company_id: Optional[str] = None
    created_at: Timestamp = None
    updated_at: Timestamp = None

    @model_validator(mode="before")
    @classmethod
    def _nulls_take_defaults(cls, data: Any) -> Any:
        # A NULL column gets the declared default rather than failing validation.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class DealRecord(BaseRecord):
    customer_id: Optional[str] = None
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    vehicle_id: Optional[str] = None
    vehicle_info: str = ""
    stage: str = "New"
    amount: float = 0
    source: str = ""
    type: str = "New Sale"
    priority: str = "Medium"
    rep_id: Optional[str] = None
    rep_name: str = ""
    probability: int = 0
    expected_close_date: Day = None
    notes: str = ""


class ContactRecord(BaseRecord):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""
    source: str = ""
    status: str = "lead"
    assigned_to: Optional[str] = None
    tags: list[Any] = Field(default_factory=list)
    notes: str = ""


class TaskRecord(BaseRecord):
    title: str = ""
    description: str = ""
    due_date: Day = None
    status: str = "pending"
    priority: str = "medium"
    contact_id: Optional[str] = None
    deal_id: Optional[str] = None
    assigned_to: Optional[str] = None


class CommissionRecord(BaseRecord):
    rep_id: Optional[str] = None
    rep_name: str = ""
    deal_id: Optional[str] = None
    rule_id: Optional[str] = None
    amount: float = 0
    sale_amount: float = 0
    period: str = ""
    status: str = "pending"


class CommissionRuleRecord(BaseRecord):
    name: str = ""
    type: str = "percentage"
    rate: float = 0
    flat_amount: float = 0
    applies_to: str = ""
    is_active: bool = True


class InventoryItemRecord(BaseRecord):
    name: str = ""
    type: Optional[str] = None
    status: Optional[str] = None
    serial_number: Optional[str] = None
    location: Optional[str] = None
    photos: list[Any] = Field(default_factory=list)
    assigned_to: Optional[str] = None
    purchase_date: Day = None
    warranty_expiration: Day = None


class PdiChecklistRecord(BaseRecord):
    vehicle_id: str = ""
    technician: str = "Unknown"
    status: str = "not_started"
    checklist_data: list[Any] = Field(default_factory=list)


class AgreementRecord(BaseRecord):
    customer_id: Optional[str] = None
    customer_name: str = ""
    customer_email: str = ""
    vehicle_id: Optional[str] = None
    vehicle_info: str = ""
    quote_id: Optional[str] = None
    title: str = ""
    type: str = "purchase"
    status: str = "draft"
    pdf_url: Optional[str] = None
    signed_at: Timestamp = None
    effective_date: Day = None
    expiration_date: Day = None
    total_amount: float = 0
    down_payment: float = 0
    financing_amount: float = 0
    monthly_payment: float = 0
    notes: str = ""


class AgreementTemplateRecord(BaseRecord):
    name: str = ""
    description: str = ""
    category: str = "general"
    fields: list[Any] = Field(default_factory=list)
    is_active: bool = True


class ServiceTicketRecord(BaseRecord):
    title: str = "Untitled Ticket"
    description: str = ""
    category: str = "General"
    priority: str = "Medium"
    status: str = "Open"
    customer_id: Optional[str] = None
    customer_name: str = ""
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    vehicle_id: Optional[str] = None
    vehicle_info: str = ""
    assigned_to: Optional[str] = None
    assigned_tech_name: Optional[str] = None
    scheduled_date: Day = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    parts: list[Any] = Field(default_factory=list)
    labor: list[Any] = Field(default_factory=list)
    timeline: list[Any] = Field(default_factory=list)
    notes: str = ""
    total_cost: Optional[float] = None
    customer_approved: Optional[bool] = None


class LoanRecord(BaseRecord):
    customer_id: Optional[str] = None
    customer_name: str = ""
    vehicle_id: Optional[str] = None
    vehicle_info: str = ""
    loan_amount: float = 0
    down_payment: float = 0
    interest_rate: float = 0
    term_months: int = 0
    monthly_payment: float = 0
    start_date: Day = None
    status: str = "active"
    remaining_balance: float = 0


class LoanPaymentRecord(BaseRecord):
    loan_id: Optional[str] = None
    amount: float = 0
    principal_amount: float = 0
    interest_amount: float = 0
    payment_date: Day = None
    payment_method: str = "ach"
    status: str = "completed"


class QuoteRecord(BaseRecord):
    customer_id: Optional[str] = None
    customer_name: str = ""
    vehicle_id: Optional[str] = None
    vehicle_info: str = ""
    status: str = "draft"
    subtotal: float = 0
    tax: float = 0
    total: float = 0
    valid_until: Day = None
    items: list[Any] = Field(default_factory=list)


class DeliveryRecord(BaseRecord):
    customer_id: Optional[str] = None
    customer_name: str = ""
    vehicle_id: Optional[str] = None
    vehicle_info: str = ""
    status: str = "scheduled"
    scheduled_date: Day = None
    delivered_at: Timestamp = None
    address: str = ""
    driver_name: str = ""
    notes: str = ""


class CompanySettingsRecord(BaseRecord):
    name: str = ""
    domain: str = ""
    timezone: str = "UTC"
    currency: str = "USD"
    date_format: str = "MM/DD/YYYY"
    time_format: str = "12h"
