from fastapi import APIRouter, Depends, Query, Request, Response, status
from typing import List, Optional
from app.modules.loans.dependencies import get_loan_service
from app.modules.loans import schemas
from app.modules.loans.links import to_response, collection_link_header, loan_url
from app.modules.loans.models import LoanStatus, LoanType
from app.modules.loans.services import LoanService

router = APIRouter(prefix="/loans", tags=["loans"])


@router.get("", response_model=List[schemas.LoanResponse])
async def get_loans(
    request: Request,
    response: Response,
    service: LoanService = Depends(get_loan_service)
):
    """Get all loans"""
    loans = await service.get_loans()
    response.headers["Link"] = collection_link_header(request)
    return [to_response(request, loan) for loan in loans]


@router.post("", response_model=schemas.LoanResponse, status_code=status.HTTP_201_CREATED)
async def create_loan(
    data: schemas.LoanCreate,
    request: Request,
    response: Response,
    service: LoanService = Depends(get_loan_service)
):
    """
    Create a loan.
    
    - status defaults to PENDING, loanDate to today
    - Location header points at the new loan
    """
    loan = await service.create_loan(data)
    response.headers["Location"] = loan_url(request, loan.id)
    return to_response(request, loan)


# Fixed paths are declared before /{loan_id}

@router.get("/search", response_model=List[schemas.LoanResponse])
async def search_loans(
    request: Request,
    response: Response,
    borrower_name: Optional[str] = Query(None, alias="borrowerName", description="Case-insensitive substring"),
    loan_status: Optional[LoanStatus] = Query(None, alias="status"),
    loan_type: Optional[LoanType] = Query(None, alias="loanType"),
    service: LoanService = Depends(get_loan_service)
):
    """
    Search loans.
    
    - borrowerName takes precedence: when present, status and loanType are ignored
    - otherwise status and loanType are combined when both are given
    - no filters returns every loan
    """
    loans = await service.search_loans(borrower_name, loan_status, loan_type)
    response.headers["Link"] = collection_link_header(request, rel="loans")
    return [to_response(request, loan) for loan in loans]


@router.get("/stats", response_model=schemas.LoanStats)
async def get_loan_stats(service: LoanService = Depends(get_loan_service)):
    """Get loan count and amount statistics"""
    return await service.get_stats()


@router.get("/statuses")
async def get_loan_statuses():
    """Get all available loan statuses"""
    return {"statuses": [s.value for s in LoanStatus]}


@router.get("/types")
async def get_loan_types():
    """Get all available loan types"""
    return {"types": [t.value for t in LoanType]}


@router.post("/calculate", response_model=schemas.PaymentCalculationResponse)
async def calculate_payment(data: schemas.PaymentCalculationRequest):
    """Calculate the monthly payment and totals for a prospective loan"""
    return LoanService.calculate_payment(data)


@router.get("/{loan_id}", response_model=schemas.LoanResponse)
async def get_loan(
    loan_id: int,
    request: Request,
    service: LoanService = Depends(get_loan_service)
):
    """Get a loan with update/delete links"""
    loan = await service.get_loan(loan_id)
    return to_response(request, loan, detail=True)


@router.put("/{loan_id}", response_model=schemas.LoanResponse)
async def update_loan(
    loan_id: int,
    data: schemas.LoanUpdate,
    request: Request,
    service: LoanService = Depends(get_loan_service)
):
    """Replace every field of a loan except its id"""
    loan = await service.update_loan(loan_id, data)
    return to_response(request, loan)


@router.delete("/{loan_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_loan(
    loan_id: int,
    service: LoanService = Depends(get_loan_service)
):
    """Delete a loan"""
    await service.delete_loan(loan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
