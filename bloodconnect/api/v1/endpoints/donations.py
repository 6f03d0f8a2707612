from fastapi import APIRouter, Depends, status
from typing import List
import logging
from bloodconnect.api.deps import get_store
from bloodconnect.api.v1.endpoints.auth import require_admin
from bloodconnect.models.user import User
from bloodconnect.schemas.donation import DonationCreate, DonationResponse, DonationWithDetails
from bloodconnect.services.portal_store import PortalStore

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/", response_model=List[DonationWithDetails])
async def get_donations(
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    """Case log: every donation with its donor and request."""
    return store.list_donations()

@router.post("/", response_model=DonationResponse, status_code=status.HTTP_201_CREATED)
async def record_donation(
    donation: DonationCreate,
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    """Close a case. Also resets the donor's eligibility clock."""
    created = store.record_donation(donation)
    logger.info(f"Donation {created.id} logged by admin: {current_user.email}")
    return created
