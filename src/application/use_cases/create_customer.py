"""Create Customer Use Case."""

from dataclasses import dataclass

from src.application.dto.converters import customer_to_response
from src.application.dto.requests import CreateCustomerRequest
from src.application.dto.responses import CustomerResponse
from src.config import get_logger
from src.core.entities.customer import Customer
from src.core.exceptions import ValidationError
from src.core.interfaces.transaction import ITransaction, ITransactionRunner

logger = get_logger(__name__)

MIN_NAME_LENGTH = 2


@dataclass
class CreateCustomerResult:
    """Result of creating a customer."""

    customer: Customer


class CreateCustomerUseCase:
    """Create a customer account."""

    def __init__(self, runner: ITransactionRunner | None = None):
        self._runner = runner

    async def _get_runner(self) -> ITransactionRunner:
        if self._runner is None:
            from src.infrastructure.storage.sqlite import get_transaction_runner

            self._runner = await get_transaction_runner()
        return self._runner

    async def execute(self, request: CreateCustomerRequest) -> CreateCustomerResult:
        """Execute create customer use case."""
        name = (request.name or "").strip()
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(
                "name", f"Name must be at least {MIN_NAME_LENGTH} characters", request.name
            )

        customer = Customer(
            name=name,
            phone=(request.phone or "").strip(),
            address=(request.address or "").strip(),
        )

        async def work(tx: ITransaction) -> Customer:
            await tx.insert_customer(customer)
            await tx.log_activity(f"Created new customer: {customer.name}")
            return customer

        runner = await self._get_runner()
        created = await runner.run(work, operation="create_customer")

        logger.info("customer_created", customer_id=created.id, name=created.name)
        return CreateCustomerResult(customer=created)

    def to_response(self, result: CreateCustomerResult) -> CustomerResponse:
        """Convert result to API response."""
        return customer_to_response(result.customer)
