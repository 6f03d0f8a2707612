from fastapi import APIRouter, Depends
from typing import List
import logging
from bloodconnect.api.deps import get_store
from bloodconnect.api.v1.endpoints.auth import require_admin
from bloodconnect.models.user import User
from bloodconnect.schemas.inventory import InventoryUpdate, BloodInventoryResponse
from bloodconnect.services.portal_store import PortalStore

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/", response_model=List[BloodInventoryResponse])
async def get_inventory(store: PortalStore = Depends(get_store)):
    return store.get_inventory()

@router.patch("/{blood_group}", response_model=BloodInventoryResponse)
async def update_inventory(
    blood_group: str,
    inventory_update: InventoryUpdate,
    store: PortalStore = Depends(get_store),
    current_user: User = Depends(require_admin)
):
    """Set units and/or status for one blood group, creating the row if needed."""
    inventory = store.upsert_inventory(
        blood_group,
        units_available=inventory_update.units_available,
        status=inventory_update.status,
    )
    logger.info(f"Inventory {inventory.blood_group.value} updated by admin: {current_user.email}")
    return inventory
