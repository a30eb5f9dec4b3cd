# Loans module
from app.modules.loans.models import Loan, LoanStatus, LoanType, calculate_monthly_payment
from app.modules.loans.repository import LoanRepository
from app.modules.loans.services import LoanService

__all__ = [
    "Loan", "LoanStatus", "LoanType", "calculate_monthly_payment",
    "LoanRepository", "LoanService",
]
