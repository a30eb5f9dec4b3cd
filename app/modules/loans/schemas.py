from pydantic import BaseModel, Field, field_validator, field_serializer
from pydantic.alias_generators import to_camel
from datetime import date
from decimal import Decimal
from typing import Optional, List
from app.modules.loans.models import LoanStatus, LoanType


class CamelModel(BaseModel):
    """Base schema exchanging camelCase field names on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# ============ Loan Schemas ============

class LoanBase(CamelModel):
    borrower_name: str = Field(..., min_length=2, max_length=100)
    loan_amount: Decimal = Field(..., ge=100, le=1_000_000, decimal_places=2)
    interest_rate: Decimal = Field(..., ge=0, le=30)
    loan_term_months: int = Field(..., ge=1, le=360)
    loan_date: Optional[date] = None
    status: Optional[LoanStatus] = None
    loan_type: Optional[LoanType] = None
    description: Optional[str] = None

    @field_validator("borrower_name")
    @classmethod
    def borrower_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Borrower name is required")
        return value


class LoanCreate(LoanBase):
    """Omitted status and loanDate default to PENDING and today"""
    pass


class LoanUpdate(LoanBase):
    """Full replacement payload: every mutable field is overwritten"""
    pass


class Link(BaseModel):
    rel: str
    href: str
    method: str = "GET"


class LoanResponse(LoanBase):
    id: int
    loan_date: date
    status: LoanStatus
    monthly_payment: Decimal
    links: List[Link] = []

    @field_serializer("loan_amount", "interest_rate", "monthly_payment")
    def serialize_money(self, value: Decimal) -> float:
        return float(value)


class LoanStats(CamelModel):
    total_loans: int
    pending_loans: int
    approved_loans: int
    total_amount: float


# ============ Calculator Schemas ============

class PaymentCalculationRequest(CamelModel):
    loan_amount: Decimal = Field(..., ge=100, le=1_000_000, decimal_places=2)
    interest_rate: Decimal = Field(..., ge=0, le=30)
    loan_term_months: int = Field(..., ge=1, le=360)


class PaymentCalculationResponse(PaymentCalculationRequest):
    monthly_payment: Decimal
    total_repayment: Decimal
    total_interest: Decimal

    @field_serializer("loan_amount", "interest_rate", "monthly_payment", "total_repayment", "total_interest")
    def serialize_money(self, value: Decimal) -> float:
        return float(value)
