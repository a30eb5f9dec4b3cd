from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.modules.loans.repository import LoanRepository
from app.modules.loans.services import LoanService


def get_loan_repository(db: AsyncSession = Depends(get_db)) -> LoanRepository:
    """Loan repository bound to the request's database session"""
    return LoanRepository(db)


def get_loan_service(
    repository: LoanRepository = Depends(get_loan_repository)
) -> LoanService:
    """Loan service wired with its repository"""
    return LoanService(repository)
