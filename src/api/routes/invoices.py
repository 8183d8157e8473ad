"""Sales invoice endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import (
    get_create_invoice_use_case,
    get_edit_invoice_use_case,
    get_invoices,
)
from src.application.dto.converters import invoice_to_response
from src.application.dto.requests import CreateInvoiceRequest, EditInvoiceRequest
from src.application.dto.responses import (
    EditInvoiceResponse,
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
)
from src.application.use_cases import CreateInvoiceUseCase, EditInvoiceUseCase
from src.core.entities.invoice import InvoiceStatus
from src.infrastructure.storage.sqlite import SQLiteInvoiceStore

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    customer_id: str | None = Query(None, description="Filter by customer"),
    invoice_status: InvoiceStatus | None = Query(None, alias="status", description="Filter by stored status"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    store: SQLiteInvoiceStore = Depends(get_invoices),
) -> InvoiceListResponse:
    """List invoices, newest first."""
    invoices = await store.list_invoices(
        customer_id=customer_id,
        status=invoice_status,
        limit=limit,
        offset=offset,
    )
    return InvoiceListResponse(
        invoices=[invoice_to_response(inv) for inv in invoices],
        total=len(invoices),
    )


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Insufficient stock"},
        503: {"model": ErrorResponse, "description": "Transaction conflict"},
    },
)
async def create_invoice(
    request: CreateInvoiceRequest,
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """Create an invoice and deduct its stock in one transaction."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/{invoice_number}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_number: str,
    store: SQLiteInvoiceStore = Depends(get_invoices),
) -> InvoiceResponse:
    """Get an invoice by number."""
    invoice = await store.get_invoice(invoice_number)
    if invoice is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Invoice not found: {invoice_number}",
        )
    return invoice_to_response(invoice)


@router.put(
    "/{invoice_number}",
    response_model=EditInvoiceResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Insufficient stock"},
        503: {"model": ErrorResponse, "description": "Transaction conflict"},
    },
)
async def edit_invoice(
    invoice_number: str,
    request: EditInvoiceRequest,
    use_case: EditInvoiceUseCase = Depends(get_edit_invoice_use_case),
) -> EditInvoiceResponse:
    """Replace an invoice's lines and reconcile stock against the old ones."""
    result = await use_case.execute(invoice_number, request)
    return use_case.to_response(result)
