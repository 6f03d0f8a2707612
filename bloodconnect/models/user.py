from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from datetime import datetime
from bloodconnect.database.database import Base
from bloodconnect.models.donor import enum_values
import enum

class UserRole(str, enum.Enum):
    ADMIN = "admin"
    DONOR = "donor"
    HOSPITAL = "hospital"

class User(Base):
    """Login identity. Not linked to a Donor row."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        default=UserRole.DONOR,
    )
    phone = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
