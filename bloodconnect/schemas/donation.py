from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from bloodconnect.schemas.donor import DonorResponse
from bloodconnect.schemas.blood_request import BloodRequestResponse
from bloodconnect.schemas.validators import blank_to_none, not_in_future

class DonationCreate(BaseModel):
    donor_id: int
    request_id: int
    donation_date: Optional[datetime] = None  # defaults to now
    units_contributed: int = Field(1, ge=1, description="At least 1 unit is required")
    remarks: Optional[str] = None

    @field_validator("donation_date", "remarks", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator("donation_date")
    @classmethod
    def not_after_now(cls, v):
        return not_in_future(v)

class DonationResponse(BaseModel):
    id: int
    donor_id: int
    request_id: int
    donation_date: datetime
    units_contributed: int
    remarks: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class DonationWithDetails(DonationResponse):
    """Case log row: the donation plus its donor and request."""
    donor: Optional[DonorResponse] = None
    request: Optional[BloodRequestResponse] = None
