from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from bloodconnect.models.donor import BloodGroup
from bloodconnect.models.blood_inventory import InventoryStatus

class InventoryUpdate(BaseModel):
    units_available: Optional[int] = Field(None, ge=0)
    status: Optional[InventoryStatus] = None

class BloodInventoryResponse(BaseModel):
    id: int
    blood_group: BloodGroup
    units_available: int
    status: InventoryStatus
    last_updated: datetime

    class Config:
        from_attributes = True
