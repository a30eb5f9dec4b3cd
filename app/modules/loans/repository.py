from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_
from typing import List, Optional
from app.core.exceptions import LoanNotFoundError
from app.modules.loans.models import Loan, LoanStatus, LoanType


class LoanRepository:
    """Persistence gateway for loan records"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, loan: Loan) -> Loan:
        """Insert a new loan or write back changes to a tracked one"""
        if loan.id is None:
            self.db.add(loan)
        else:
            loan = await self.db.merge(loan)
        await self.db.commit()
        await self.db.refresh(loan)
        return loan

    async def find_by_id(self, loan_id: int) -> Optional[Loan]:
        return await self.db.get(Loan, loan_id)

    async def get_by_id(self, loan_id: int) -> Loan:
        """Like find_by_id, but a missing loan raises LoanNotFoundError"""
        loan = await self.find_by_id(loan_id)
        if loan is None:
            raise LoanNotFoundError(loan_id)
        return loan

    async def exists_by_id(self, loan_id: int) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(Loan).where(Loan.id == loan_id)
        )
        return result.scalar_one() > 0

    async def find_all(self) -> List[Loan]:
        return await self._find()

    async def delete_by_id(self, loan_id: int) -> None:
        loan = await self.get_by_id(loan_id)
        await self.db.delete(loan)
        await self.db.commit()

    async def find_by_borrower_name_containing(self, borrower_name: str) -> List[Loan]:
        """Case-insensitive substring match on borrower name"""
        return await self._find(
            func.lower(Loan.borrower_name).contains(borrower_name.lower(), autoescape=True)
        )

    async def find_by_status(self, status: LoanStatus) -> List[Loan]:
        return await self._find(Loan.status == status)

    async def find_by_loan_type(self, loan_type: LoanType) -> List[Loan]:
        return await self._find(Loan.loan_type == loan_type)

    async def find_by_status_and_loan_type(self, status: LoanStatus, loan_type: LoanType) -> List[Loan]:
        return await self._find(and_(Loan.status == status, Loan.loan_type == loan_type))

    async def _find(self, *criteria) -> List[Loan]:
        query = select(Loan).where(*criteria).order_by(Loan.id)
        result = await self.db.execute(query)
        return list(result.scalars().all())
