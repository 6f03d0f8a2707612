from sqlalchemy import Column, Integer, String, DateTime, Enum
from datetime import datetime
from sqlalchemy.orm import relationship
from bloodconnect.database.database import Base
import enum

class BloodGroup(str, enum.Enum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"

class ApprovalStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

def enum_values(enum_cls):
    """Persist enum values ("A+", "pending") rather than member names."""
    return [member.value for member in enum_cls]

class Donor(Base):
    __tablename__ = "donors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=False)
    blood_group = Column(
        Enum(BloodGroup, name="blood_group", values_callable=enum_values),
        nullable=False,
        index=True,
    )
    city = Column(String, nullable=False)
    batch = Column(String, nullable=True)
    whatsapp_number = Column(String, nullable=True)
    last_donation_date = Column(DateTime, nullable=True)
    approval_status = Column(
        Enum(ApprovalStatus, name="approval_status", values_callable=enum_values),
        nullable=False,
        default=ApprovalStatus.PENDING,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    donations = relationship("Donation", back_populates="donor", lazy="dynamic")
