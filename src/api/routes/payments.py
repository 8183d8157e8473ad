"""Payment endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_record_payment_use_case
from src.application.dto.requests import RecordPaymentRequest
from src.application.dto.responses import ErrorResponse, PaymentResponse
from src.application.use_cases import RecordPaymentUseCase

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse, "description": "Transaction conflict"},
    },
)
async def record_payment(
    request: RecordPaymentRequest,
    use_case: RecordPaymentUseCase = Depends(get_record_payment_use_case),
) -> PaymentResponse:
    """
    Record a customer payment.

    The amount settles open invoices oldest first. Anything left over is
    reported as overpayment and not stored as credit.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)
