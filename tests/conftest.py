"""
Test configuration and fixtures for the loan management API tests.
"""
import os

# Point the application engine at SQLite before any app module is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from typing import AsyncGenerator
from decimal import Decimal
from datetime import date

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from app.core.database import Base, get_db
from main import app


# ============================================================
# Database Fixtures
# ============================================================

# Use SQLite for testing (in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for each test"""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    
    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    
    async def override_get_db():
        yield db_session
    
    app.dependency_overrides[get_db] = override_get_db
    
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    
    app.dependency_overrides.clear()


# ============================================================
# Loan Fixtures
# ============================================================

@pytest.fixture
def loan_payload():
    """Valid create/update request body"""
    return {
        "borrowerName": "John Smith",
        "loanAmount": 50000,
        "interestRate": 5.5,
        "loanTermMonths": 60,
        "loanType": "PERSONAL",
        "description": "Home renovation"
    }


@pytest.fixture
def make_loan(db_session):
    """Factory persisting loans directly through the session"""
    from app.modules.loans.models import Loan, LoanStatus, LoanType
    
    async def _make_loan(
        borrower_name="Test Borrower",
        loan_amount="10000.00",
        interest_rate="5.00",
        loan_term_months=12,
        status=LoanStatus.PENDING,
        loan_type=LoanType.PERSONAL,
        **kwargs
    ):
        loan = Loan(
            borrower_name=borrower_name,
            loan_amount=Decimal(loan_amount),
            interest_rate=Decimal(interest_rate),
            loan_term_months=loan_term_months,
            status=status,
            loan_type=loan_type,
            **kwargs
        )
        db_session.add(loan)
        await db_session.commit()
        await db_session.refresh(loan)
        return loan
    
    return _make_loan


@pytest.fixture
async def stats_loans(make_loan):
    """Two PENDING loans totalling 30,000 and one APPROVED loan of 20,000"""
    from app.modules.loans.models import LoanStatus
    
    return [
        await make_loan("Alice Pending", "10000.00", status=LoanStatus.PENDING),
        await make_loan("Bob Pending", "20000.00", status=LoanStatus.PENDING),
        await make_loan("Carol Approved", "20000.00", status=LoanStatus.APPROVED),
    ]


@pytest.fixture
async def search_loans(make_loan):
    """Loans covering every search rule"""
    from app.modules.loans.models import LoanStatus, LoanType
    
    return {
        "john_pending": await make_loan("John Smith", status=LoanStatus.PENDING, loan_type=LoanType.PERSONAL),
        "johnny_approved": await make_loan("Johnny Appleseed", status=LoanStatus.APPROVED, loan_type=LoanType.AUTO),
        "alice_approved": await make_loan("Alice Jones", status=LoanStatus.APPROVED, loan_type=LoanType.PERSONAL),
        "mark_rejected": await make_loan("Mark Lee", status=LoanStatus.REJECTED, loan_type=LoanType.BUSINESS),
        "dana_mortgage": await make_loan("Dana White", status=LoanStatus.PENDING, loan_type=LoanType.MORTGAGE,
                                         loan_date=date(2023, 5, 1)),
    }
