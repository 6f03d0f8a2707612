from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
import logging
from bloodconnect.api.deps import get_store
from bloodconnect.api.v1.endpoints.auth import require_admin
from bloodconnect.models.user import User
from bloodconnect.schemas.donor import DonorCreate, DonorResponse, DonorApprovalUpdate
from bloodconnect.services.portal_store import PortalStore

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=DonorResponse, status_code=status.HTTP_201_CREATED)
async def register_donor(
    donor: DonorCreate,
    store: PortalStore = Depends(get_store)
):
    """Public donor registration. New donors wait for admin approval."""
    return store.create_donor(donor)

@router.get("/", response_model=List[DonorResponse])
async def get_donors(
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    """Get all donors, newest first, each with their eligibility."""
    return store.list_donors()

@router.get("/match", response_model=List[DonorResponse])
async def match_donors(
    blood_group: str = Query(..., description="Exact blood group, e.g. O+ (encode '+' as %2B)"),
    city: Optional[str] = Query(None, description="Case-insensitive part of the donor's city"),
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    """Approved donors with this blood group, optionally in a matching city."""
    return store.match_donors(blood_group, city)

@router.get("/matching/{request_id}", response_model=List[DonorResponse])
async def match_donors_for_request(
    request_id: int,
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    """Approved donors matching a request's blood group and location."""
    return store.match_donors_for_request(request_id)

@router.get("/{donor_id}", response_model=DonorResponse)
async def get_donor(
    donor_id: int,
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    return store.get_donor(donor_id)

@router.patch("/{donor_id}/approval", response_model=DonorResponse)
async def update_donor_approval(
    donor_id: int,
    approval: DonorApprovalUpdate,
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    """Approve or reject a pending donor. Decisions are final."""
    donor = store.set_donor_approval(donor_id, approval.approval_status)
    logger.info(f"Donor {donor_id} {donor.approval_status.value} by admin: {current_user.email}")
    return donor
