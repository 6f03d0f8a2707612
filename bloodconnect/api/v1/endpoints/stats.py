from fastapi import APIRouter, Depends
from bloodconnect.api.deps import get_store
from bloodconnect.api.v1.endpoints.auth import require_admin
from bloodconnect.models.user import User
from bloodconnect.schemas.stats import AdminStatsResponse, PublicStatsResponse
from bloodconnect.services.portal_store import PortalStore

router = APIRouter()

@router.get("/admin", response_model=AdminStatsResponse)
async def get_admin_stats(
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    return store.get_admin_stats()

@router.get("/public", response_model=PublicStatsResponse)
async def get_public_stats(store: PortalStore = Depends(get_store)):
    return store.get_public_stats()
