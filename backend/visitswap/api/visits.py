"""Visit completion endpoint."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Request

from visitswap.auth.session import get_current_user_id
from visitswap.database import LedgerStore, get_store
from visitswap.schemas.visit import CompleteVisitRequest, CompleteVisitResponse
from visitswap.services.visits import VisitCompletionService
from visitswap.utils.exceptions import AppException, NotFoundError, handle_app_error, not_found_error

router = APIRouter(prefix="/api/visits", tags=["visits"])


def get_visit_service(store: LedgerStore = Depends(get_store)) -> VisitCompletionService:
    return VisitCompletionService(store)


@router.post("/complete", response_model=CompleteVisitResponse)
def complete_visit(
    body: CompleteVisitRequest,
    request: Request,
    user_agent: Optional[str] = Header(None),
    user_id: UUID = Depends(get_current_user_id),
    visits: VisitCompletionService = Depends(get_visit_service),
) -> CompleteVisitResponse:
    """
    Record a completed visit and credit the caller.

    Args:
        body: Visited site, plus optional IP and duration
        request: Used for the client address when no IP is given
        user_agent: Taken from the User-Agent header

    Returns:
        success flag and the caller's new credit balance
    """
    ip = body.ip or (request.client.host if request.client else "unknown")
    try:
        result = visits.complete_visit(
            visitor_id=user_id,
            site_id=body.siteId,
            ip=ip,
            user_agent=user_agent,
            duration=body.duration,
        )
    except NotFoundError as e:
        raise not_found_error(message=e.message)
    except AppException as e:
        raise handle_app_error(e, "visit")
    return CompleteVisitResponse(success=True, credits=result.new_balance)
