# Database models
from .donor import Donor, BloodGroup, ApprovalStatus
from .blood_request import BloodRequest, UrgencyLevel, RequestStatus
from .donation import Donation
from .blood_inventory import BloodInventory, InventoryStatus
from .user import User, UserRole
