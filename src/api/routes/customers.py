"""Customer endpoints: records, statements and payments."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import (
    get_create_customer_use_case,
    get_customers,
    get_record_payment_use_case,
    get_statement_use_case,
)
from src.application.dto.converters import customer_to_response
from src.application.dto.requests import (
    CreateCustomerRequest,
    CustomerPaymentRequest,
    RecordPaymentRequest,
)
from src.application.dto.responses import (
    CustomerListResponse,
    CustomerResponse,
    ErrorResponse,
    PaymentResponse,
    StatementResponse,
)
from src.application.use_cases import (
    CreateCustomerUseCase,
    GetCustomerStatementUseCase,
    RecordPaymentUseCase,
)
from src.infrastructure.storage.sqlite import SQLiteCustomerStore

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    store: SQLiteCustomerStore = Depends(get_customers),
) -> CustomerListResponse:
    """List customers with their outstanding balances."""
    customers = await store.list_customers(limit=limit, offset=offset)
    return CustomerListResponse(
        customers=[customer_to_response(c) for c in customers],
        total=len(customers),
    )


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_customer(
    request: CreateCustomerRequest,
    use_case: CreateCustomerUseCase = Depends(get_create_customer_use_case),
) -> CustomerResponse:
    """Create a customer."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_customer(
    customer_id: str,
    store: SQLiteCustomerStore = Depends(get_customers),
) -> CustomerResponse:
    """Get a customer by ID."""
    customer = await store.get_customer(customer_id)
    if customer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Customer not found: {customer_id}",
        )
    return customer_to_response(customer)


@router.get(
    "/{customer_id}/statement",
    response_model=StatementResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_statement(
    customer_id: str,
    use_case: GetCustomerStatementUseCase = Depends(get_statement_use_case),
) -> StatementResponse:
    """Customer statement. Past-due open invoices are shown as Overdue."""
    result = await use_case.execute(customer_id)
    return use_case.to_response(result)


@router.post(
    "/{customer_id}/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_customer_payment(
    customer_id: str,
    request: CustomerPaymentRequest,
    use_case: RecordPaymentUseCase = Depends(get_record_payment_use_case),
) -> PaymentResponse:
    """Record a payment against the customer's open invoices, oldest first."""
    result = await use_case.execute(
        RecordPaymentRequest(
            customer_id=customer_id,
            amount=request.amount,
            payment_date=request.payment_date,
        )
    )
    return use_case.to_response(result)
