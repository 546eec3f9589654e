"""Site directory API endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, status

from visitswap.auth.session import get_current_user_id
from visitswap.database import LedgerStore, get_store
from visitswap.schemas.site import SiteCreateRequest, SiteResponse
from visitswap.services.sites import SiteDirectoryService
from visitswap.utils.exceptions import AppException, handle_app_error

router = APIRouter(prefix="/api/sites", tags=["sites"])


def get_site_service(store: LedgerStore = Depends(get_store)) -> SiteDirectoryService:
    return SiteDirectoryService(store)


@router.post("", response_model=SiteResponse, status_code=status.HTTP_201_CREATED)
def create_site(
    request: SiteCreateRequest,
    user_id: UUID = Depends(get_current_user_id),
    sites: SiteDirectoryService = Depends(get_site_service),
) -> SiteResponse:
    """Register a site owned by the caller."""
    try:
        return SiteResponse.from_orm(sites.create_site(user_id, request.title, request.url))
    except AppException as e:
        raise handle_app_error(e, "create_site")


@router.get("", response_model=list[SiteResponse])
def list_own_sites(
    user_id: UUID = Depends(get_current_user_id),
    sites: SiteDirectoryService = Depends(get_site_service),
) -> list[SiteResponse]:
    """All sites owned by the caller."""
    return [SiteResponse.from_orm(s) for s in sites.list_own_sites(user_id)]


@router.get("/browse", response_model=list[SiteResponse])
def browse_sites(
    user_id: UUID = Depends(get_current_user_id),
    sites: SiteDirectoryService = Depends(get_site_service),
) -> list[SiteResponse]:
    """Active sites of other members, available to visit for credits."""
    return [SiteResponse.from_orm(s) for s in sites.browse_sites(user_id)]
