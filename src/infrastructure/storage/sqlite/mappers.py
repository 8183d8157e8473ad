"""Row <-> entity conversion shared by the SQLite stores and transactions."""

import json
from datetime import date, datetime

import aiosqlite

from src.core.entities.activity_log import ActivityLog
from src.core.entities.customer import Customer
from src.core.entities.invoice import Invoice, InvoiceItem, InvoiceStatus
from src.core.entities.part import Part
from src.core.entities.pricing import PricingConfig, PricingType, round_money

PART_COLUMNS = (
    "id, name, part_number, part_code, description, brand, category, "
    "equipment_model, image_url, price, previous_price, taxable, tax, "
    "ex_fact_price, pricing_type, stock, created_at, updated_at"
)

INVOICE_COLUMNS = (
    "invoice_number, customer_id, customer_name, customer_address, "
    "customer_phone, invoice_date, due_date, items_json, subtotal, "
    "tax_amount, total, paid_amount, balance_due, status, created_at, updated_at"
)


def _parse_datetime(value: str | None, default: datetime | None = None) -> datetime | None:
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return default


def _parse_date(value: str | None) -> date:
    if value:
        try:
            return date.fromisoformat(value[:10])
        except (ValueError, TypeError):
            pass
    return date.today()


def row_to_part(row: aiosqlite.Row) -> Part:
    """Convert a database row to a Part entity."""
    return Part(
        id=row["id"],
        name=row["name"],
        part_number=row["part_number"],
        part_code=row["part_code"],
        description=row["description"] or "",
        brand=row["brand"] or "",
        category=row["category"] or "",
        equipment_model=row["equipment_model"] or "",
        image_url=row["image_url"],
        price=float(row["price"]),
        previous_price=float(row["previous_price"]) if row["previous_price"] is not None else None,
        taxable=bool(row["taxable"]),
        tax=float(row["tax"]),
        pricing_type=PricingType(row["pricing_type"]),
        stock=int(row["stock"]),
        created_at=_parse_datetime(row["created_at"], datetime.now()),
        updated_at=_parse_datetime(row["updated_at"], datetime.now()),
    )


def part_params(part: Part) -> tuple:
    """Column values for an INSERT in PART_COLUMNS order."""
    return (
        part.id,
        part.name,
        part.part_number,
        part.part_code,
        part.description,
        part.brand,
        part.category,
        part.equipment_model,
        part.image_url,
        part.price,
        part.previous_price,
        int(part.taxable),
        part.tax,
        part.ex_fact_price,
        part.pricing_type.value,
        part.stock,
        part.created_at.isoformat(),
        part.updated_at.isoformat(),
    )


def row_to_customer(row: aiosqlite.Row) -> Customer:
    """Convert a database row to a Customer entity.

    Rows selected with a ``balance`` column carry the derived balance.
    """
    balance = 0.0
    if "balance" in row.keys() and row["balance"] is not None:
        balance = round_money(row["balance"])
    return Customer(
        id=row["id"],
        name=row["name"],
        phone=row["phone"] or "",
        address=row["address"] or "",
        balance=balance,
        created_at=_parse_datetime(row["created_at"], datetime.now()),
    )


def row_to_invoice(row: aiosqlite.Row) -> Invoice:
    """Convert a database row to an Invoice entity."""
    items = [InvoiceItem(**item) for item in json.loads(row["items_json"] or "[]")]
    return Invoice(
        invoice_number=row["invoice_number"],
        customer_id=row["customer_id"],
        customer_name=row["customer_name"],
        customer_address=row["customer_address"] or "",
        customer_phone=row["customer_phone"] or "",
        invoice_date=_parse_date(row["invoice_date"]),
        due_date=_parse_date(row["due_date"]),
        items=items,
        paid_amount=float(row["paid_amount"]),
        status=InvoiceStatus(row["status"]),
        created_at=_parse_datetime(row["created_at"], datetime.now()),
        updated_at=_parse_datetime(row["updated_at"], datetime.now()),
    )


def invoice_params(invoice: Invoice) -> tuple:
    """Column values for an INSERT in INVOICE_COLUMNS order."""
    return (
        invoice.invoice_number,
        invoice.customer_id,
        invoice.customer_name,
        invoice.customer_address,
        invoice.customer_phone,
        invoice.invoice_date.isoformat(),
        invoice.due_date.isoformat(),
        json.dumps([item.model_dump() for item in invoice.items]),
        invoice.subtotal,
        invoice.tax_amount,
        invoice.total,
        invoice.paid_amount,
        invoice.balance_due,
        invoice.status.value,
        invoice.created_at.isoformat(),
        invoice.updated_at.isoformat(),
    )


def row_to_activity(row: aiosqlite.Row) -> ActivityLog:
    """Convert a database row to an ActivityLog entity."""
    return ActivityLog(
        id=row["id"],
        description=row["description"],
        date=_parse_datetime(row["date"]),
    )


def row_to_pricing_config(row: aiosqlite.Row | None, default_tax_rate: float) -> PricingConfig:
    """Convert the settings row; a missing row yields defaults."""
    if row is None:
        return PricingConfig(tax_rate=default_tax_rate)
    return PricingConfig(
        tax_rate=float(row["tax_rate"]),
        seeded=bool(row["seeded"]),
        updated_at=_parse_datetime(row["updated_at"]),
    )
