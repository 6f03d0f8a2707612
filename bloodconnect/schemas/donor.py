from pydantic import BaseModel, EmailStr, Field, computed_field, field_validator
from typing import Optional
from datetime import datetime
from bloodconnect.models.donor import BloodGroup, ApprovalStatus
from bloodconnect.services.eligibility import EligibilityBand, evaluate_eligibility, next_eligible_date
from bloodconnect.schemas.validators import strip_text, blank_to_none, not_in_future

class DonorCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=10, description="Please enter a valid phone number")
    blood_group: BloodGroup
    city: str = Field(..., min_length=1)
    batch: Optional[str] = None
    whatsapp_number: Optional[str] = None
    last_donation_date: Optional[datetime] = None

    @field_validator("name", "phone", "city", mode="before")
    @classmethod
    def strip_required(cls, v):
        return strip_text(v)

    @field_validator("batch", "whatsapp_number", "last_donation_date", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator("last_donation_date")
    @classmethod
    def not_after_now(cls, v):
        return not_in_future(v)

class DonorApprovalUpdate(BaseModel):
    # Kept as a raw string so unsupported targets surface as lifecycle errors
    approval_status: str

class EligibilityResponse(BaseModel):
    band: EligibilityBand
    is_eligible: bool
    label: str
    days_since_last_donation: Optional[int] = None
    days_remaining: Optional[int] = None
    next_eligible_date: Optional[datetime] = None

class DonorResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    blood_group: BloodGroup
    city: str
    batch: Optional[str] = None
    whatsapp_number: Optional[str] = None
    last_donation_date: Optional[datetime] = None
    approval_status: ApprovalStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def eligibility(self) -> EligibilityResponse:
        result = evaluate_eligibility(self.last_donation_date)
        return EligibilityResponse(
            band=result.band,
            is_eligible=result.is_eligible,
            label=result.label,
            days_since_last_donation=result.days_since_last_donation,
            days_remaining=result.days_remaining,
            next_eligible_date=next_eligible_date(self.last_donation_date),
        )

    class Config:
        from_attributes = True
