from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from bloodconnect.database.database import Base

class Donation(Base):
    """Case closure log entry: one donor gave blood against one request."""
    __tablename__ = "donations"

    id = Column(Integer, primary_key=True, index=True)
    donor_id = Column(Integer, ForeignKey("donors.id"), nullable=False, index=True)
    request_id = Column(Integer, ForeignKey("blood_requests.id"), nullable=False, index=True)
    donation_date = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    units_contributed = Column(Integer, nullable=False, default=1)
    remarks = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    donor = relationship("Donor", back_populates="donations")
    request = relationship("BloodRequest", back_populates="donations")
