"""
Fallback datasets, one function per module.

Rows use the stored (column) shape and go through the same schema transform
as live rows. Every generator seeds its own Faker instance and dates are
anchored to a fixed day, so each call returns the same rows.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from faker import Faker

from data.tenancy import DEMO_COMPANY_ID


_ANCHOR = datetime(2024, 1, 20, 9, 0, tzinfo=timezone.utc)

REPS = [("rep-001", "Sarah Johnson"), ("rep-002", "Mike Davis"), ("rep-003", "Alicia Chen")]
TECHS = [("tech-001", "Tom Wilson"), ("tech-002", "Priya Patel")]
UNITS = [
    ("vh-001", "2023 Forest River Cherokee 274RK"),
    ("vh-002", "2024 Keystone Montana 3761FL"),
    ("vh-003", "2022 Grand Design Solitude 310GK"),
    ("vh-004", "2024 Jayco Eagle 321RSTS"),
    ("vh-005", "2023 Winnebago Minnie 2529RG"),
]

DEAL_STAGES = ["New", "Qualified", "Proposal", "Negotiation", "Closed Won", "Closed Lost"]


def _faker(seed: int) -> Faker:
    fake = Faker("en_US")
    fake.seed_instance(seed)
    return fake


def _stamp(days_ago: float) -> str:
    return (_ANCHOR - timedelta(days=days_ago)).isoformat().replace("+00:00", "Z")


def _day(days_from_anchor: int) -> str:
    return (_ANCHOR + timedelta(days=days_from_anchor)).date().isoformat()


def _customers(seed: int, n: int) -> list[dict]:
    fake = _faker(seed)
    return [
        {
            "customer_id": f"cust-{i + 1:03d}",
            "customer_name": fake.name(),
            "customer_email": fake.email(),
            "customer_phone": fake.numerify("(555) ###-####"),
        }
        for i in range(n)
    ]


def _base(prefix: str, i: int, created_days_ago: float, updated_days_ago: float | None = None) -> dict:
    return {
        "id": f"{prefix}-{i + 1:03d}",
        "company_id": DEMO_COMPANY_ID,
        "created_at": _stamp(created_days_ago),
        "updated_at": _stamp(created_days_ago if updated_days_ago is None else updated_days_ago),
    }


def deals_mock(n_rows: int = 6) -> list[dict]:
    fake = _faker(101)
    customers = _customers(11, n_rows)
    rows = []
    for i, cust in enumerate(customers):
        stage = DEAL_STAGES[i % len(DEAL_STAGES)]
        rep_id, rep_name = REPS[i % len(REPS)]
        vehicle_id, vehicle_info = UNITS[i % len(UNITS)]
        probability = {"New": 10, "Qualified": 40, "Proposal": 60, "Negotiation": 75, "Closed Won": 100, "Closed Lost": 0}[stage]
        rows.append(
            {
                **_base("deal", i, 4 + 3 * i, 1 + i),
                **cust,
                "vehicle_id": vehicle_id,
                "vehicle_info": vehicle_info,
                "stage": stage,
                "amount": fake.random_int(min=38, max=95) * 1000,
                "source": fake.random_element(["Website", "Referral", "Trade Show", "Walk-in"]),
                "type": fake.random_element(["New Sale", "Used Sale", "Trade-In"]),
                "priority": fake.random_element(["High", "Medium", "Low"]),
                "rep_id": rep_id,
                "rep_name": rep_name,
                "probability": probability,
                "expected_close_date": _day(10 + 7 * i),
                "notes": fake.sentence(nb_words=8),
            }
        )
    return rows


def contacts_mock(n_rows: int = 6) -> list[dict]:
    fake = _faker(102)
    rows = []
    for i in range(n_rows):
        first, last = fake.first_name(), fake.last_name()
        rows.append(
            {
                **_base("contact", i, 2 + 2 * i),
                "first_name": first,
                "last_name": last,
                "email": f"{first}.{last}@example.com".lower(),
                "phone": fake.numerify("(555) ###-####"),
                "company": fake.company() if i % 3 == 0 else "",
                "source": fake.random_element(["Website", "Referral", "Facebook", "Walk-in"]),
                "status": fake.random_element(["lead", "prospect", "customer"]),
                "assigned_to": REPS[i % len(REPS)][0],
                "tags": fake.random_elements(["rv", "financing", "trade-in", "service"], length=2, unique=True),
                "notes": fake.sentence(nb_words=6),
            }
        )
    return rows


def tasks_mock(n_rows: int = 5) -> list[dict]:
    fake = _faker(103)
    rows = []
    for i in range(n_rows):
        rows.append(
            {
                **_base("task", i, 1 + i),
                "title": fake.random_element(["Follow up call", "Send brochure", "Schedule test drive", "Confirm financing"]),
                "description": fake.sentence(nb_words=8),
                "due_date": _day(2 + i),
                "status": fake.random_element(["pending", "in_progress", "completed"]),
                "priority": fake.random_element(["high", "medium", "low"]),
                "contact_id": f"contact-{i + 1:03d}",
                "deal_id": f"deal-{i + 1:03d}",
                "assigned_to": REPS[i % len(REPS)][0],
            }
        )
    return rows


def commissions_mock() -> list[dict]:
    fake = _faker(104)
    rows = []
    periods = ["2024-01", "2023-12"]
    for i in range(6):
        rep_id, rep_name = REPS[i % len(REPS)]
        sale_amount = fake.random_int(min=40, max=90) * 1000
        rate = 0.03 if i % 2 == 0 else 0.025
        rows.append(
            {
                **_base("comm", i, 3 + 4 * i),
                "rep_id": rep_id,
                "rep_name": rep_name,
                "deal_id": f"deal-{i + 1:03d}",
                "rule_id": "rule-001" if i % 2 == 0 else "rule-002",
                "amount": round(sale_amount * rate, 2),
                "sale_amount": sale_amount,
                "period": periods[i // 3],
                "status": fake.random_element(["pending", "approved", "paid"]),
            }
        )
    return rows


def commission_rules_mock() -> list[dict]:
    return [
        {
            **_base("rule", 0, 30),
            "name": "Standard new unit",
            "type": "percentage",
            "rate": 0.03,
            "flat_amount": 0,
            "applies_to": "New Sale",
            "is_active": True,
        },
        {
            **_base("rule", 1, 45),
            "name": "Used unit",
            "type": "percentage",
            "rate": 0.025,
            "flat_amount": 0,
            "applies_to": "Used Sale",
            "is_active": True,
        },
        {
            **_base("rule", 2, 60),
            "name": "F&I spiff",
            "type": "flat",
            "rate": 0,
            "flat_amount": 250,
            "applies_to": "Finance",
            "is_active": False,
        },
    ]


def inventory_mock() -> list[dict]:
    fake = _faker(105)
    rows = []
    for i, (vehicle_id, vehicle_info) in enumerate(UNITS):
        rows.append(
            {
                **_base("inv", i, 20 + 5 * i),
                "name": vehicle_info,
                "type": fake.random_element(["Travel Trailer", "Fifth Wheel", "Motorhome"]),
                "status": fake.random_element(["Available", "Reserved", "Sold", "Service"]),
                "serial_number": fake.bothify("RV####??").upper(),
                "location": f"Main Lot {fake.random_uppercase_letter()}-{fake.random_int(1, 30)}",
                "photos": [],
                "assigned_to": None,
                "purchase_date": _day(-120 - 10 * i),
                "warranty_expiration": _day(600 - 10 * i),
            }
        )
    return rows


def pdi_checklists_mock() -> list[dict]:
    steps = ["Exterior: Roof seals", "Electrical: Battery", "Plumbing: Water pump", "Appliances: Refrigerator"]
    rows = []
    for i, status in enumerate(["completed", "in_progress", "not_started"]):
        vehicle_id, _ = UNITS[i]
        done = {"completed": len(steps), "in_progress": 2, "not_started": 0}[status]
        rows.append(
            {
                **_base("pdi", i, 2 + 3 * i),
                "vehicle_id": vehicle_id,
                "technician": TECHS[i % len(TECHS)][1],
                "status": status,
                "checklist_data": [
                    {"step": step, "status": "pass" if n < done else "pending", "notes": ""}
                    for n, step in enumerate(steps)
                ],
            }
        )
    return rows


def agreements_mock() -> list[dict]:
    customers = _customers(12, 3)
    rows = []
    for i, cust in enumerate(customers):
        vehicle_id, vehicle_info = UNITS[i]
        total = [48000, 62000, 3500][i]
        rows.append(
            {
                **_base("agr", i, 5 + 6 * i),
                "customer_id": cust["customer_id"],
                "customer_name": cust["customer_name"],
                "customer_email": cust["customer_email"],
                "vehicle_id": vehicle_id,
                "vehicle_info": vehicle_info,
                "quote_id": f"quote-{i + 1:03d}",
                "title": ["Purchase Agreement", "Finance Agreement", "Extended Warranty"][i],
                "type": ["purchase", "finance", "warranty"][i],
                "status": ["signed", "pending", "draft"][i],
                "pdf_url": None,
                "signed_at": _stamp(4) if i == 0 else None,
                "effective_date": _day(-4 + i),
                "expiration_date": _day(361 + i) if i == 2 else None,
                "total_amount": total,
                "down_payment": round(total * 0.1, 2) if i < 2 else 0,
                "financing_amount": round(total * 0.9, 2) if i == 1 else 0,
                "monthly_payment": 512.4 if i == 1 else 0,
                "notes": "",
            }
        )
    return rows


def agreement_templates_mock() -> list[dict]:
    return [
        {
            **_base("tpl", 0, 75),
            "name": "Retail Purchase Agreement",
            "description": "Standard purchase contract for new and used units",
            "category": "purchase",
            "fields": [
                {"name": "customer_name", "type": "text", "page": 1, "x": 120, "y": 180},
                {"name": "vehicle_info", "type": "text", "page": 1, "x": 120, "y": 220},
                {"name": "signature", "type": "signature", "page": 2, "x": 100, "y": 640},
            ],
            "is_active": True,
        },
        {
            **_base("tpl", 1, 90),
            "name": "Consignment Agreement",
            "description": "Dealer consignment terms",
            "category": "consignment",
            "fields": [{"name": "owner_name", "type": "text", "page": 1, "x": 110, "y": 160}],
            "is_active": False,
        },
    ]


def service_tickets_mock() -> list[dict]:
    fake = _faker(106)
    customers = _customers(13, 4)
    rows = []
    for i, cust in enumerate(customers):
        vehicle_id, vehicle_info = UNITS[i]
        tech_id, tech_name = TECHS[i % len(TECHS)]
        parts = [{"id": f"part-{i + 1}", "name": fake.random_element(["Water pump", "Awning arm", "Roof sealant"]), "quantity": 1, "cost": 85.0}]
        labor = [{"id": f"labor-{i + 1}", "description": "Diagnosis and repair", "hours": 2.0, "rate": 125.0}]
        rows.append(
            {
                **_base("ticket", i, 1 + 2 * i),
                "title": fake.random_element(["Water leak at roof", "Slide-out not retracting", "AC not cooling", "Annual inspection"]),
                "description": fake.sentence(nb_words=10),
                "category": fake.random_element(["Warranty", "Repair", "Maintenance"]),
                "priority": fake.random_element(["High", "Medium", "Low"]),
                "status": ["Open", "In Progress", "Waiting Parts", "Completed"][i],
                "customer_id": cust["customer_id"],
                "customer_name": cust["customer_name"],
                "customer_phone": cust["customer_phone"],
                "customer_email": cust["customer_email"],
                "vehicle_id": vehicle_id,
                "vehicle_info": vehicle_info,
                "assigned_to": tech_id,
                "assigned_tech_name": tech_name,
                "scheduled_date": _day(1 + i),
                "estimated_hours": 2.0,
                "actual_hours": 2.5 if i == 3 else None,
                "parts": parts,
                "labor": labor,
                "timeline": [{"id": f"tl-{i + 1}", "timestamp": _stamp(1 + 2 * i), "action": "created", "user": "service desk", "details": ""}],
                "notes": "",
                "total_cost": 335.0,
                "customer_approved": i != 0,
            }
        )
    return rows


def loans_mock() -> list[dict]:
    customers = _customers(14, 3)
    rows = []
    for i, cust in enumerate(customers):
        vehicle_id, vehicle_info = UNITS[i + 1]
        amount = [54000, 41000, 72500][i]
        rows.append(
            {
                **_base("loan", i, 40 + 30 * i),
                "customer_id": cust["customer_id"],
                "customer_name": cust["customer_name"],
                "vehicle_id": vehicle_id,
                "vehicle_info": vehicle_info,
                "loan_amount": amount,
                "down_payment": round(amount * 0.1, 2),
                "interest_rate": [6.99, 7.49, 5.99][i],
                "term_months": [180, 144, 240][i],
                "monthly_payment": [485.12, 421.77, 519.3][i],
                "start_date": _day(-40 - 30 * i),
                "status": ["active", "active", "paid_off"][i],
                "remaining_balance": [52110.4, 39022.1, 0][i],
            }
        )
    return rows


def loan_payments_mock() -> list[dict]:
    rows = []
    for i in range(4):
        loan_n = i % 2 + 1
        principal, interest = [(170.5, 314.62), (185.2, 236.57), (171.49, 313.63), (186.35, 235.42)][i]
        rows.append(
            {
                **_base("pmt", i, 2 + 30 * (i // 2)),
                "loan_id": f"loan-{loan_n:03d}",
                "amount": round(principal + interest, 2),
                "principal_amount": principal,
                "interest_amount": interest,
                "payment_date": _day(-2 - 30 * (i // 2)),
                "payment_method": "ach" if i % 2 == 0 else "card",
                "status": "completed",
            }
        )
    return rows


def quotes_mock() -> list[dict]:
    customers = _customers(15, 3)
    rows = []
    for i, cust in enumerate(customers):
        vehicle_id, vehicle_info = UNITS[i + 2]
        subtotal = [58900, 44750, 91200][i]
        tax = round(subtotal * 0.0825, 2)
        rows.append(
            {
                **_base("quote", i, 3 + 5 * i),
                "customer_id": cust["customer_id"],
                "customer_name": cust["customer_name"],
                "vehicle_id": vehicle_id,
                "vehicle_info": vehicle_info,
                "status": ["sent", "draft", "accepted"][i],
                "subtotal": subtotal,
                "tax": tax,
                "total": round(subtotal + tax, 2),
                "valid_until": _day(30 - 5 * i),
                "items": [{"description": vehicle_info, "quantity": 1, "unit_price": subtotal}],
            }
        )
    return rows


def deliveries_mock() -> list[dict]:
    fake = _faker(107)
    customers = _customers(16, 3)
    rows = []
    for i, cust in enumerate(customers):
        vehicle_id, vehicle_info = UNITS[i]
        rows.append(
            {
                **_base("dlv", i, 6 + 4 * i),
                "customer_id": cust["customer_id"],
                "customer_name": cust["customer_name"],
                "vehicle_id": vehicle_id,
                "vehicle_info": vehicle_info,
                "status": ["scheduled", "in_transit", "delivered"][i],
                "scheduled_date": _day(3 - 4 * i),
                "delivered_at": _stamp(1) if i == 2 else None,
                "address": fake.address().replace("\n", ", "),
                "driver_name": fake.name(),
                "notes": "",
            }
        )
    return rows


def company_settings_mock() -> list[dict]:
    return [
        {
            **_base("settings", 0, 120, 10),
            "name": "Summit RV & Marine",
            "domain": "summit-rv.example.com",
            "timezone": "America/Denver",
            "currency": "USD",
            "date_format": "MM/DD/YYYY",
            "time_format": "12h",
        }
    ]
