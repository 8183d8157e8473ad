"""Entity -> response DTO conversion shared by several use cases."""

from src.application.dto.responses import (
    CustomerResponse,
    InvoiceItemResponse,
    InvoiceResponse,
    PartResponse,
)
from src.core.entities.customer import Customer
from src.core.entities.invoice import Invoice
from src.core.entities.part import Part


def part_to_response(part: Part) -> PartResponse:
    return PartResponse(
        id=part.id,
        name=part.name,
        part_number=part.part_number,
        part_code=part.part_code,
        description=part.description,
        brand=part.brand,
        category=part.category,
        equipment_model=part.equipment_model,
        image_url=part.image_url,
        price=part.price,
        previous_price=part.previous_price,
        taxable=part.taxable,
        tax=part.tax,
        ex_fact_price=part.ex_fact_price,
        pricing_type=part.pricing_type.value,
        stock=part.stock,
        updated_at=part.updated_at,
    )


def customer_to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,
        name=customer.name,
        phone=customer.phone,
        address=customer.address,
        balance=customer.balance,
        created_at=customer.created_at,
    )


def invoice_to_response(invoice: Invoice) -> InvoiceResponse:
    return InvoiceResponse(
        invoice_number=invoice.invoice_number,
        customer_id=invoice.customer_id,
        customer_name=invoice.customer_name,
        customer_address=invoice.customer_address,
        customer_phone=invoice.customer_phone,
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        items=[
            InvoiceItemResponse(
                part_id=item.part_id,
                part_name=item.part_name,
                part_number=item.part_number,
                quantity=item.quantity,
                unit_price=item.unit_price,
                tax=item.tax,
                ex_fact_price=item.ex_fact_price,
                total=item.total,
            )
            for item in invoice.items
        ],
        subtotal=invoice.subtotal,
        tax_amount=invoice.tax_amount,
        total=invoice.total,
        paid_amount=invoice.paid_amount,
        balance_due=invoice.balance_due,
        status=invoice.status.value,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )
