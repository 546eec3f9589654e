"""Credit ledger API endpoints."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from visitswap.api.auth import get_account_service
from visitswap.auth.session import get_current_user_id
from visitswap.config import settings
from visitswap.database import LedgerStore, get_store
from visitswap.schemas.credit import BalanceResponse, CreditLogItem
from visitswap.services.accounts import AccountService
from visitswap.services.ledger import LedgerQueryService
from visitswap.utils.exceptions import AppException, handle_app_error

router = APIRouter(prefix="/api/credits", tags=["credits"])


def get_ledger_service(store: LedgerStore = Depends(get_store)) -> LedgerQueryService:
    return LedgerQueryService(store)


@router.get("/history", response_model=list[CreditLogItem])
def credit_history(
    limit: Optional[int] = Query(None, ge=1, le=settings.history_max_limit, description="Page size"),
    offset: int = Query(0, ge=0, description="Entries to skip"),
    user_id: UUID = Depends(get_current_user_id),
    ledger: LedgerQueryService = Depends(get_ledger_service),
) -> list[CreditLogItem]:
    """The caller's credit events, newest first."""
    return [CreditLogItem.from_orm(entry) for entry in ledger.history(user_id, limit=limit, offset=offset)]


@router.get("/balance", response_model=BalanceResponse)
def credit_balance(
    user_id: UUID = Depends(get_current_user_id),
    accounts: AccountService = Depends(get_account_service),
    ledger: LedgerQueryService = Depends(get_ledger_service),
) -> BalanceResponse:
    """Stored balance next to the balance recomputed from the ledger."""
    try:
        user = accounts.get_profile(user_id)
    except AppException as e:
        raise handle_app_error(e, "balance lookup")
    return BalanceResponse(credits=user.credits, ledgerTotal=ledger.ledger_balance(user_id))
