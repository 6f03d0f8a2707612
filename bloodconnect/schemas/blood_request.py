from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Optional
from datetime import datetime
from bloodconnect.models.donor import BloodGroup, ApprovalStatus
from bloodconnect.models.blood_request import UrgencyLevel, RequestStatus
from bloodconnect.schemas.validators import strip_text, blank_to_none

class BloodRequestCreate(BaseModel):
    patient_name: str = Field(..., min_length=1)
    blood_group: BloodGroup
    units_needed: int = Field(1, ge=1, description="At least 1 unit is required")
    urgency_level: UrgencyLevel = UrgencyLevel.NORMAL
    location: str = Field(..., min_length=1)
    hospital_name: str = Field(..., min_length=1)
    contact_person: str = Field(..., min_length=1)
    contact_phone: str = Field(..., min_length=10, description="Please enter a valid phone number")
    contact_whatsapp: Optional[str] = None
    remarks: Optional[str] = None

    @field_validator("patient_name", "location", "hospital_name", "contact_person", "contact_phone", mode="before")
    @classmethod
    def strip_required(cls, v):
        return strip_text(v)

    @field_validator("contact_whatsapp", "remarks", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)

class RequestApprovalUpdate(BaseModel):
    approval_status: str

class RequestStatusUpdate(BaseModel):
    status: str

class BloodRequestResponse(BaseModel):
    id: int
    patient_name: str
    blood_group: BloodGroup
    units_needed: int
    urgency_level: UrgencyLevel
    location: str
    hospital_name: str
    contact_person: str
    contact_phone: str
    contact_whatsapp: Optional[str] = None
    status: RequestStatus
    approval_status: ApprovalStatus
    remarks: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def response_time(self) -> str:
        return self.urgency_level.response_time

    @computed_field
    @property
    def is_active(self) -> bool:
        return self.approval_status == ApprovalStatus.APPROVED and self.status == RequestStatus.PENDING

    class Config:
        from_attributes = True
