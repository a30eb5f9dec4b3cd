"""
Navigation links attached to loan representations.

Every loan carries ``self`` and ``loans`` (collection) links; the detail view
adds ``update`` and ``delete`` actions. Collections stay plain JSON arrays and
advertise their own location through an RFC 8288 ``Link`` header.
"""
from fastapi import Request
from typing import List
from app.modules.loans.models import Loan
from app.modules.loans.schemas import Link, LoanResponse


def loan_url(request: Request, loan_id: int) -> str:
    return str(request.url_for("get_loan", loan_id=loan_id))


def collection_url(request: Request) -> str:
    return str(request.url_for("get_loans"))


def loan_links(request: Request, loan_id: int, detail: bool = False) -> List[Link]:
    self_href = loan_url(request, loan_id)
    links = [
        Link(rel="self", href=self_href),
        Link(rel="loans", href=collection_url(request)),
    ]
    if detail:
        links.append(Link(rel="update", href=self_href, method="PUT"))
        links.append(Link(rel="delete", href=self_href, method="DELETE"))
    return links


def to_response(request: Request, loan: Loan, detail: bool = False) -> LoanResponse:
    """Shape a loan into its response model with links attached"""
    response = LoanResponse.model_validate(loan)
    response.links = loan_links(request, loan.id, detail=detail)
    return response


def collection_link_header(request: Request, rel: str = "self") -> str:
    return f'<{collection_url(request)}>; rel="{rel}"'
