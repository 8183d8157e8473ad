"""Record Payment Use Case: allocates cash to open invoices, oldest first."""

from dataclasses import dataclass

from src.application.dto.requests import RecordPaymentRequest
from src.application.dto.responses import AllocationResponse, PaymentResponse
from src.config import get_logger, get_settings
from src.core.interfaces.transaction import ITransactionRunner
from src.core.services.payment_allocator import (
    PaymentAllocatorService,
    RecordedPayment,
    validate_payment_amount,
)

logger = get_logger(__name__)


@dataclass
class RecordPaymentResult:
    """Result of recording a payment."""

    payment: RecordedPayment
    currency: str


class RecordPaymentUseCase:
    """Record a customer payment and spread it over open invoices."""

    def __init__(
        self,
        runner: ITransactionRunner | None = None,
        allocator_service: PaymentAllocatorService | None = None,
        currency: str | None = None,
    ):
        self._runner = runner
        self._service = allocator_service
        self._currency = currency

    async def _get_runner(self) -> ITransactionRunner:
        if self._runner is None:
            from src.infrastructure.storage.sqlite import get_transaction_runner

            self._runner = await get_transaction_runner()
        return self._runner

    def _get_service(self) -> PaymentAllocatorService:
        if self._service is None:
            from src.application.services import get_payment_allocator_service

            self._service = get_payment_allocator_service()
        return self._service

    def _get_currency(self) -> str:
        if self._currency is None:
            self._currency = get_settings().pos.currency
        return self._currency

    async def execute(self, request: RecordPaymentRequest) -> RecordPaymentResult:
        """Execute record payment use case."""
        logger.info(
            "record_payment_started",
            customer_id=request.customer_id,
            amount=request.amount,
        )

        validate_payment_amount(request.amount)

        runner = await self._get_runner()
        service = self._get_service()
        payment = await runner.run(
            lambda tx: service.record_payment(
                tx,
                request.customer_id,
                request.amount,
                request.payment_date,
            ),
            operation="record_payment",
        )

        logger.info(
            "record_payment_complete",
            customer_id=request.customer_id,
            invoices=len(payment.plan.allocations),
            overpayment=payment.plan.overpayment,
        )
        return RecordPaymentResult(payment=payment, currency=self._get_currency())

    def to_response(self, result: RecordPaymentResult) -> PaymentResponse:
        """Convert result to API response."""
        payment = result.payment
        return PaymentResponse(
            customer_id=payment.customer_id,
            customer_name=payment.customer_name,
            amount=payment.plan.amount,
            payment_date=payment.payment_date,
            applied_total=payment.plan.applied_total,
            overpayment=payment.plan.overpayment,
            currency=result.currency,
            allocations=[
                AllocationResponse(
                    invoice_number=a.invoice_number,
                    applied=a.applied,
                    balance_due=a.balance_due,
                    status=a.status.value,
                )
                for a in payment.plan.allocations
            ],
        )
