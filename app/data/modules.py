"""
Module registry: one entry per CRM/DMS module.

Each module is defined by its table, its record model, its fallback dataset
and the prefix used for locally generated ids. Everything else (loading,
fallback, mutations) is shared in `data.collection`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from config import AppConfig
from data import mock_data, records
from data.schemas import RecordSchema


@dataclass(frozen=True)
class ModuleSpec:
    key: str
    label: str
    table: str
    schema: RecordSchema
    id_prefix: str
    fallback_rows: Callable[[], list[dict[str, Any]]]
    # Field charted on the module page (status/stage enumeration)
    status_field: Optional[str] = "status"
    # Never writable from this app, whatever READ_ONLY_MODULES says
    read_only: bool = False

    def fallback_records(self) -> list[dict[str, Any]]:
        """The static fallback set, in record shape. A fresh copy on every call."""
        return [self.schema.transform(row) for row in self.fallback_rows()]

    def is_writable(self, cfg: AppConfig) -> bool:
        return not self.read_only and self.key not in cfg.read_only_modules


def _module(key: str, label: str, table: str, model, id_prefix: str, fallback_rows, **kwargs: Any) -> ModuleSpec:
    return ModuleSpec(
        key=key,
        label=label,
        table=table,
        schema=RecordSchema(table, model),
        id_prefix=id_prefix,
        fallback_rows=fallback_rows,
        **kwargs,
    )


DEALS = _module("deals", "Sales Deals", "deals", records.DealRecord, "deal", mock_data.deals_mock, status_field="stage")
CONTACTS = _module("contacts", "Contacts", "crm_contacts", records.ContactRecord, "contact", mock_data.contacts_mock)
TASKS = _module("tasks", "CRM Tasks", "crm_tasks", records.TaskRecord, "task", mock_data.tasks_mock)
COMMISSIONS = _module(
    "commissions", "Commissions", "commissions", records.CommissionRecord, "comm", mock_data.commissions_mock
)
COMMISSION_RULES = _module(
    "commission_rules",
    "Commission Rules",
    "commission_rules",
    records.CommissionRuleRecord,
    "rule",
    mock_data.commission_rules_mock,
    status_field="type",
)
INVENTORY = _module(
    "inventory", "Inventory", "inventory_items", records.InventoryItemRecord, "inv", mock_data.inventory_mock
)
PDI_CHECKLISTS = _module(
    "pdi_checklists", "PDI Checklists", "pdi_checklists", records.PdiChecklistRecord, "pdi", mock_data.pdi_checklists_mock
)
AGREEMENTS = _module("agreements", "Agreements", "agreements", records.AgreementRecord, "agr", mock_data.agreements_mock)
AGREEMENT_TEMPLATES = _module(
    "agreement_templates",
    "Agreement Templates",
    "agreement_templates",
    records.AgreementTemplateRecord,
    "tpl",
    mock_data.agreement_templates_mock,
    status_field="category",
)
SERVICE_TICKETS = _module(
    "service_tickets",
    "Service Tickets",
    "service_tickets",
    records.ServiceTicketRecord,
    "ticket",
    mock_data.service_tickets_mock,
)
LOANS = _module("loans", "Loans", "loans", records.LoanRecord, "loan", mock_data.loans_mock)
LOAN_PAYMENTS = _module(
    "loan_payments", "Loan Payments", "loan_payments", records.LoanPaymentRecord, "pmt", mock_data.loan_payments_mock
)
QUOTES = _module("quotes", "Quotes", "quotes", records.QuoteRecord, "quote", mock_data.quotes_mock)
DELIVERIES = _module("deliveries", "Deliveries", "deliveries", records.DeliveryRecord, "dlv", mock_data.deliveries_mock)
# One row per company; edited in the admin console, not here.
COMPANY_SETTINGS = _module(
    "company_settings",
    "Company Settings",
    "company_settings",
    records.CompanySettingsRecord,
    "settings",
    mock_data.company_settings_mock,
    status_field=None,
    read_only=True,
)


MODULES: dict[str, ModuleSpec] = {
    m.key: m
    for m in (
        DEALS,
        CONTACTS,
        TASKS,
        COMMISSIONS,
        COMMISSION_RULES,
        INVENTORY,
        PDI_CHECKLISTS,
        AGREEMENTS,
        AGREEMENT_TEMPLATES,
        SERVICE_TICKETS,
        LOANS,
        LOAN_PAYMENTS,
        QUOTES,
        DELIVERIES,
        COMPANY_SETTINGS,
    )
}


def get_module(key: str) -> ModuleSpec:
    try:
        return MODULES[key]
    except KeyError:
        raise KeyError(f"Unknown module {key!r}; expected one of {', '.join(MODULES)}") from None
