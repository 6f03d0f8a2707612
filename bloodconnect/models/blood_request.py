from sqlalchemy import Column, Integer, String, Text, DateTime, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from bloodconnect.database.database import Base
from bloodconnect.models.donor import BloodGroup, ApprovalStatus, enum_values
import enum

class UrgencyLevel(str, enum.Enum):
    NORMAL = "normal"
    URGENT = "urgent"
    EMERGENCY = "emergency"

    @property
    def response_time(self) -> str:
        """Nominal response time shown next to the request. Not enforced."""
        return URGENCY_RESPONSE_TIMES[self]

URGENCY_RESPONSE_TIMES = {
    UrgencyLevel.NORMAL: "24 hrs",
    UrgencyLevel.URGENT: "6 hrs",
    UrgencyLevel.EMERGENCY: "Immediate",
}

class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class BloodRequest(Base):
    __tablename__ = "blood_requests"

    id = Column(Integer, primary_key=True, index=True)
    patient_name = Column(String, nullable=False)
    blood_group = Column(
        Enum(BloodGroup, name="blood_group", values_callable=enum_values),
        nullable=False,
        index=True,
    )
    units_needed = Column(Integer, nullable=False, default=1)
    urgency_level = Column(
        Enum(UrgencyLevel, name="urgency_level", values_callable=enum_values),
        nullable=False,
        default=UrgencyLevel.NORMAL,
    )
    location = Column(String, nullable=False)
    hospital_name = Column(String, nullable=False)
    contact_person = Column(String, nullable=False)
    contact_phone = Column(String, nullable=False)
    contact_whatsapp = Column(String, nullable=True)
    status = Column(
        Enum(RequestStatus, name="request_status", values_callable=enum_values),
        nullable=False,
        default=RequestStatus.PENDING,
        index=True,
    )
    approval_status = Column(
        Enum(ApprovalStatus, name="approval_status", values_callable=enum_values),
        nullable=False,
        default=ApprovalStatus.PENDING,
        index=True,
    )
    remarks = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    donations = relationship("Donation", back_populates="request", lazy="dynamic")

    @property
    def is_active(self) -> bool:
        """Publicly listed: approved and still waiting for donors."""
        return (
            self.approval_status == ApprovalStatus.APPROVED
            and self.status == RequestStatus.PENDING
        )
