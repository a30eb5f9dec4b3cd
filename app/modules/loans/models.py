from sqlalchemy import Column, Integer, String, Numeric, Date, Text, Enum as SQLEnum
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union
from app.core.database import Base
import enum

Number = Union[Decimal, float, int]

CENTS = Decimal("0.01")


class LoanStatus(str, enum.Enum):
    """Loan lifecycle status"""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    PAID_OFF = "PAID_OFF"


class LoanType(str, enum.Enum):
    PERSONAL = "PERSONAL"
    BUSINESS = "BUSINESS"
    MORTGAGE = "MORTGAGE"
    AUTO = "AUTO"


def round_currency(value: float) -> Decimal:
    """Round a float to cents, half-up, via its shortest decimal representation"""
    return Decimal(repr(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_monthly_payment(
    principal: Optional[Number],
    annual_rate: Optional[Number],
    term_months: Optional[int]
) -> Decimal:
    """
    Fixed monthly payment under standard amortization.

    payment = P * (r * (1 + r)^n) / ((1 + r)^n - 1), with r = R / 100 / 12.
    A zero rate degrades to P / n. Missing inputs give zero.
    """
    if principal is None or annual_rate is None or term_months is None:
        return Decimal("0")

    monthly_rate = float(annual_rate) / 100 / 12
    amount = float(principal)
    months = int(term_months)

    if monthly_rate == 0:
        return round_currency(amount / months)

    growth = (1 + monthly_rate) ** months
    payment = amount * (monthly_rate * growth) / (growth - 1)
    return round_currency(payment)


class Loan(Base):
    """
    A standalone loan record.
    New instances default to PENDING status and today's loan date.
    """
    __tablename__ = "loans"

    id = Column(Integer, primary_key=True, index=True)
    borrower_name = Column(String(100), nullable=False, index=True)
    loan_amount = Column(Numeric(12, 2), nullable=False)
    interest_rate = Column(Numeric(7, 4), nullable=False)
    loan_term_months = Column(Integer, nullable=False)
    loan_date = Column(Date, nullable=False, default=date.today)
    status = Column(SQLEnum(LoanStatus), nullable=False, default=LoanStatus.PENDING, index=True)
    loan_type = Column(SQLEnum(LoanType), nullable=True, index=True)
    description = Column(Text, nullable=True)

    def __init__(self, **kwargs):
        kwargs.setdefault("status", LoanStatus.PENDING)
        kwargs.setdefault("loan_date", date.today())
        super().__init__(**kwargs)

    @property
    def monthly_payment(self) -> Decimal:
        """Monthly payment derived from amount, rate and term"""
        return calculate_monthly_payment(self.loan_amount, self.interest_rate, self.loan_term_months)

    def __repr__(self):
        return f"<Loan(id={self.id}, borrower={self.borrower_name}, status={self.status})>"
