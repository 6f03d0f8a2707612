from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from bloodconnect.core.config import settings
from bloodconnect.models.user import UserRole
from bloodconnect.schemas.validators import strip_text, blank_to_none

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=settings.PASSWORD_MIN_LENGTH, description=f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters")
    name: str = Field(..., min_length=2, description="Name must be at least 2 characters")
    role: UserRole = UserRole.DONOR
    phone: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return strip_text(v)

    @field_validator("phone", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)

class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    phone: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
