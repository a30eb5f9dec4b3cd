from datetime import date
from typing import List, Optional
import logging

from app.core.exceptions import LoanNotFoundError
from app.modules.loans.models import (
    Loan, LoanStatus, LoanType, CENTS, calculate_monthly_payment
)
from app.modules.loans.repository import LoanRepository
from app.modules.loans.schemas import (
    LoanCreate, LoanUpdate, LoanStats,
    PaymentCalculationRequest, PaymentCalculationResponse
)

logger = logging.getLogger(__name__)

# Fields overwritten by a full update; id is never touched
MUTABLE_FIELDS = (
    "borrower_name", "loan_amount", "interest_rate", "loan_term_months",
    "loan_date", "status", "loan_type", "description",
)


class LoanService:
    """Loan operations on top of an explicitly supplied repository"""

    def __init__(self, repository: LoanRepository):
        self.repository = repository

    async def get_loans(self) -> List[Loan]:
        return await self.repository.find_all()

    async def get_loan(self, loan_id: int) -> Loan:
        return await self.repository.get_by_id(loan_id)

    async def create_loan(self, data: LoanCreate) -> Loan:
        loan = Loan(**self._field_values(data))
        loan = await self.repository.save(loan)
        logger.info(f"Created loan {loan.id} for {loan.borrower_name}")
        return loan

    async def update_loan(self, loan_id: int, data: LoanUpdate) -> Loan:
        """Replace every mutable field of the loan with the payload values"""
        loan = await self.repository.get_by_id(loan_id)

        for field, value in self._field_values(data).items():
            setattr(loan, field, value)

        loan = await self.repository.save(loan)
        logger.info(f"Updated loan {loan.id}")
        return loan

    async def delete_loan(self, loan_id: int) -> None:
        if not await self.repository.exists_by_id(loan_id):
            raise LoanNotFoundError(loan_id)
        await self.repository.delete_by_id(loan_id)
        logger.info(f"Deleted loan {loan_id}")

    async def search_loans(
        self,
        borrower_name: Optional[str] = None,
        status: Optional[LoanStatus] = None,
        loan_type: Optional[LoanType] = None
    ) -> List[Loan]:
        """
        Filter loans using the first matching rule:

        - a non-empty borrower_name alone (status and loan_type are ignored)
        - status and loan_type together
        - status only
        - loan_type only
        - no filters: every loan
        """
        if borrower_name:
            return await self.repository.find_by_borrower_name_containing(borrower_name)
        if status is not None and loan_type is not None:
            return await self.repository.find_by_status_and_loan_type(status, loan_type)
        if status is not None:
            return await self.repository.find_by_status(status)
        if loan_type is not None:
            return await self.repository.find_by_loan_type(loan_type)
        return await self.repository.find_all()

    async def get_stats(self) -> LoanStats:
        loans = await self.repository.find_all()
        return LoanStats(
            total_loans=len(loans),
            pending_loans=sum(1 for loan in loans if loan.status == LoanStatus.PENDING),
            approved_loans=sum(1 for loan in loans if loan.status == LoanStatus.APPROVED),
            total_amount=sum(float(loan.loan_amount) for loan in loans)
        )

    @staticmethod
    def calculate_payment(request: PaymentCalculationRequest) -> PaymentCalculationResponse:
        monthly_payment = calculate_monthly_payment(
            request.loan_amount, request.interest_rate, request.loan_term_months
        )
        total_repayment = (monthly_payment * request.loan_term_months).quantize(CENTS)
        return PaymentCalculationResponse(
            loan_amount=request.loan_amount,
            interest_rate=request.interest_rate,
            loan_term_months=request.loan_term_months,
            monthly_payment=monthly_payment,
            total_repayment=total_repayment,
            total_interest=total_repayment - request.loan_amount
        )

    @staticmethod
    def _field_values(data) -> dict:
        values = {field: getattr(data, field) for field in MUTABLE_FIELDS}
        # Unset status/date fall back to the record defaults
        if values["status"] is None:
            values["status"] = LoanStatus.PENDING
        if values["loan_date"] is None:
            values["loan_date"] = date.today()
        return values
