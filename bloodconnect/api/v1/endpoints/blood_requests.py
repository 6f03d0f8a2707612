from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
import logging
from bloodconnect.api.deps import get_store
from bloodconnect.api.v1.endpoints.auth import require_admin
from bloodconnect.core.config import settings
from bloodconnect.models.user import User
from bloodconnect.schemas.blood_request import (
    BloodRequestCreate,
    BloodRequestResponse,
    RequestApprovalUpdate,
    RequestStatusUpdate
)
from bloodconnect.services.portal_store import PortalStore

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=BloodRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_blood_request(
    request: BloodRequestCreate,
    store: PortalStore = Depends(get_store)
):
    """Public blood request. Listed only once an admin approves it."""
    return store.create_blood_request(request)

@router.get("/", response_model=List[BloodRequestResponse])
async def get_blood_requests(
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    return store.list_blood_requests()

@router.get("/active", response_model=List[BloodRequestResponse])
async def get_active_blood_requests(
    limit: Optional[int] = Query(None, ge=1, le=100),
    store: PortalStore = Depends(get_store)
):
    """Approved requests still waiting for donors (public view)."""
    return store.list_active_blood_requests(limit or settings.ACTIVE_REQUESTS_LIMIT)

@router.get("/{request_id}", response_model=BloodRequestResponse)
async def get_blood_request(
    request_id: int,
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    return store.get_blood_request(request_id)

@router.patch("/{request_id}/approval", response_model=BloodRequestResponse)
async def update_request_approval(
    request_id: int,
    approval: RequestApprovalUpdate,
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    request = store.set_request_approval(request_id, approval.approval_status)
    logger.info(f"Blood request {request_id} {request.approval_status.value} by admin: {current_user.email}")
    return request

@router.patch("/{request_id}/status", response_model=BloodRequestResponse)
async def update_request_status(
    request_id: int,
    status_update: RequestStatusUpdate,
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    request = store.set_request_status(request_id, status_update.status)
    logger.info(f"Blood request {request_id} moved to {request.status.value} by admin: {current_user.email}")
    return request
