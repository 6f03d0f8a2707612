from sqlalchemy import Column, Integer, String, DateTime, Enum
from datetime import datetime
from bloodconnect.database.database import Base
from bloodconnect.models.donor import BloodGroup, enum_values
import enum

class InventoryStatus(str, enum.Enum):
    AVAILABLE = "available"
    LOW = "low"
    URGENT = "urgent"

class BloodInventory(Base):
    __tablename__ = "blood_inventory"

    id = Column(Integer, primary_key=True, index=True)
    blood_group = Column(
        Enum(BloodGroup, name="blood_group", values_callable=enum_values),
        unique=True,
        nullable=False,
        index=True,
    )
    units_available = Column(Integer, nullable=False, default=0)
    # Set by administrators; never derived from units_available
    status = Column(String(20), nullable=False, default=InventoryStatus.AVAILABLE.value)
    last_updated = Column(DateTime, nullable=False, default=datetime.utcnow)
