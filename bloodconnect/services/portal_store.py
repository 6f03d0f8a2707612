"""
Repository for the donation portal.

A PortalStore wraps one SQLAlchemy session and exposes every portal
operation: donor registration and approval, blood requests and their
lifecycle, donation recording, inventory and dashboard stats. Inputs may be
the pydantic request models or plain dicts; dicts are validated first and
nothing is written when validation fails.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from bloodconnect.core.exceptions import DuplicateError, NotFoundError, ValidationError
from bloodconnect.database.database import transaction
from bloodconnect.models.donor import Donor, BloodGroup, ApprovalStatus
from bloodconnect.models.blood_request import BloodRequest, RequestStatus
from bloodconnect.models.donation import Donation
from bloodconnect.models.blood_inventory import BloodInventory, InventoryStatus
from bloodconnect.schemas.donor import DonorCreate
from bloodconnect.schemas.blood_request import BloodRequestCreate
from bloodconnect.schemas.donation import DonationCreate
from bloodconnect.services.lifecycle import DONOR_APPROVAL, REQUEST_APPROVAL, REQUEST_PROCESSING
from bloodconnect.services.matching import filter_matching_donors
from bloodconnect.services.stats import StatsService

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

ABO_TYPES = {"A", "B", "AB", "O"}


def parse_input(schema: Type[SchemaT], data: Union[SchemaT, Dict[str, Any]]) -> SchemaT:
    """Validate raw input against a request model, raising the portal ValidationError."""
    if isinstance(data, schema):
        return data
    try:
        return schema(**data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "Invalid input")
        raise ValidationError(f"{field}: {message}" if field else message)


def parse_blood_group(value: Union[str, BloodGroup]) -> BloodGroup:
    if isinstance(value, BloodGroup):
        return value
    raw = str(value or "").upper()
    # An unencoded '+' in a query string arrives as a space
    if raw.endswith(" ") and raw.strip() in ABO_TYPES:
        raw = raw.strip() + "+"
    raw = raw.strip()
    try:
        return BloodGroup(raw)
    except ValueError:
        allowed = ", ".join(g.value for g in BloodGroup)
        raise ValidationError(f"Invalid blood group '{value}'. Expected one of: {allowed}")


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class PortalStore:
    """All portal reads and writes over a single session."""

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------------------------------------------- donors

    def get_donor(self, donor_id: int) -> Donor:
        donor = self.db.query(Donor).filter(Donor.id == donor_id).first()
        if not donor:
            raise NotFoundError("Donor not found")
        return donor

    def get_donor_by_email(self, email: str) -> Optional[Donor]:
        return self.db.query(Donor).filter(Donor.email == email).first()

    def list_donors(self) -> List[Donor]:
        return self.db.query(Donor).order_by(Donor.created_at.desc(), Donor.id.desc()).all()

    def create_donor(self, data: Union[DonorCreate, Dict[str, Any]]) -> Donor:
        """Register a donor. New donors always start pending."""
        donor_in = parse_input(DonorCreate, data)

        if self.get_donor_by_email(donor_in.email):
            raise DuplicateError("Email already registered")

        donor = Donor(**donor_in.dict(), approval_status=ApprovalStatus.PENDING)
        if donor.last_donation_date is not None:
            donor.last_donation_date = to_naive_utc(donor.last_donation_date)
        self.db.add(donor)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise DuplicateError("Email already registered")
        self.db.refresh(donor)

        logger.info(f"Donor registered: {donor.id} ({donor.blood_group.value}, {donor.city})")
        return donor

    def set_donor_approval(self, donor_id: int, target: Union[str, ApprovalStatus]) -> Donor:
        target_state = DONOR_APPROVAL.parse(target)
        donor = self.get_donor(donor_id)
        donor.approval_status = DONOR_APPROVAL.transition(donor.approval_status, target_state)
        self.db.commit()
        self.db.refresh(donor)

        logger.info(f"Donor {donor.id} approval set to {donor.approval_status.value}")
        return donor

    def match_donors(self, blood_group: Union[str, BloodGroup], city: Optional[str] = None) -> List[Donor]:
        """Approved donors of exactly this blood group, optionally in a matching city."""
        group = parse_blood_group(blood_group)
        candidates = (
            self.db.query(Donor)
            .filter(Donor.blood_group == group, Donor.approval_status == ApprovalStatus.APPROVED)
            .order_by(Donor.created_at.desc(), Donor.id.desc())
            .all()
        )
        return filter_matching_donors(candidates, group, city)

    def match_donors_for_request(self, request_id: int) -> List[Donor]:
        request = self.get_blood_request(request_id)
        return self.match_donors(request.blood_group, request.location)

    # -------------------------------------------------------- blood requests

    def get_blood_request(self, request_id: int) -> BloodRequest:
        request = self.db.query(BloodRequest).filter(BloodRequest.id == request_id).first()
        if not request:
            raise NotFoundError("Request not found")
        return request

    def list_blood_requests(self) -> List[BloodRequest]:
        return (
            self.db.query(BloodRequest)
            .order_by(BloodRequest.created_at.desc(), BloodRequest.id.desc())
            .all()
        )

    def list_active_blood_requests(self, limit: Optional[int] = None) -> List[BloodRequest]:
        """Approved requests still waiting for donors, newest first."""
        query = (
            self.db.query(BloodRequest)
            .filter(
                BloodRequest.approval_status == ApprovalStatus.APPROVED,
                BloodRequest.status == RequestStatus.PENDING,
            )
            .order_by(BloodRequest.created_at.desc(), BloodRequest.id.desc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def create_blood_request(self, data: Union[BloodRequestCreate, Dict[str, Any]]) -> BloodRequest:
        request_in = parse_input(BloodRequestCreate, data)
        request = BloodRequest(
            **request_in.dict(),
            status=RequestStatus.PENDING,
            approval_status=ApprovalStatus.PENDING,
        )
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)

        logger.info(
            f"Blood request created: {request.id} ({request.blood_group.value} x{request.units_needed}, "
            f"{request.urgency_level.value}) at {request.hospital_name}"
        )
        return request

    def set_request_approval(self, request_id: int, target: Union[str, ApprovalStatus]) -> BloodRequest:
        target_state = REQUEST_APPROVAL.parse(target)
        request = self.get_blood_request(request_id)
        request.approval_status = REQUEST_APPROVAL.transition(request.approval_status, target_state)
        self.db.commit()
        self.db.refresh(request)

        logger.info(f"Blood request {request.id} approval set to {request.approval_status.value}")
        return request

    def set_request_status(self, request_id: int, target: Union[str, RequestStatus]) -> BloodRequest:
        target_state = REQUEST_PROCESSING.parse(target)
        request = self.get_blood_request(request_id)
        request.status = REQUEST_PROCESSING.transition(request.status, target_state)
        self.db.commit()
        self.db.refresh(request)

        logger.info(f"Blood request {request.id} status set to {request.status.value}")
        return request

    # ------------------------------------------------------------- donations

    def record_donation(self, data: Union[DonationCreate, Dict[str, Any]]) -> Donation:
        """
        Close a case: log the donation and restart the donor's eligibility clock.

        Both writes share one transaction. The donor's last donation date only
        moves forward, so back-dated entries never shorten the cooldown; a
        stored date that lies in the future is always replaced.
        """
        donation_in = parse_input(DonationCreate, data)
        donor = self.get_donor(donation_in.donor_id)
        request = self.get_blood_request(donation_in.request_id)
        donation_date = to_naive_utc(donation_in.donation_date or datetime.utcnow())

        with transaction(self.db):
            donation = Donation(
                donor_id=donor.id,
                request_id=request.id,
                donation_date=donation_date,
                units_contributed=donation_in.units_contributed,
                remarks=donation_in.remarks,
            )
            self.db.add(donation)
            self.db.flush()

            current = donor.last_donation_date
            # A stored future date is replaced by any real donation
            if current is None or donation_date > current or current > datetime.utcnow():
                donor.last_donation_date = donation_date

        self.db.refresh(donation)
        logger.info(
            f"Donation {donation.id} recorded: donor {donor.id} -> request {request.id}, "
            f"{donation.units_contributed} unit(s) on {donation_date.isoformat()}"
        )
        return donation

    def list_donations(self) -> List[Donation]:
        """Donations with donor and request loaded, most recent donation first."""
        return (
            self.db.query(Donation)
            .options(joinedload(Donation.donor), joinedload(Donation.request))
            .order_by(Donation.donation_date.desc(), Donation.id.desc())
            .all()
        )

    def reconcile_last_donation_dates(self) -> int:
        """
        Move each donor's last donation date up to their latest logged donation.

        Repairs rows written before donation recording was transactional.
        Returns the number of donors updated.
        """
        latest = (
            self.db.query(Donation.donor_id, func.max(Donation.donation_date))
            .group_by(Donation.donor_id)
            .all()
        )
        updated = 0
        with transaction(self.db):
            for donor_id, latest_date in latest:
                donor = self.db.get(Donor, donor_id)
                if donor is None:
                    logger.warning(f"Donation references missing donor {donor_id}")
                    continue
                if donor.last_donation_date is None or donor.last_donation_date < latest_date:
                    logger.info(
                        f"Reconciling donor {donor_id}: last donation "
                        f"{donor.last_donation_date} -> {latest_date}"
                    )
                    donor.last_donation_date = latest_date
                    updated += 1
        return updated

    # ------------------------------------------------------------- inventory

    def get_inventory(self) -> List[BloodInventory]:
        return self.db.query(BloodInventory).order_by(BloodInventory.id).all()

    def get_inventory_by_group(self, blood_group: Union[str, BloodGroup]) -> Optional[BloodInventory]:
        group = parse_blood_group(blood_group)
        return self.db.query(BloodInventory).filter(BloodInventory.blood_group == group).first()

    def upsert_inventory(
        self,
        blood_group: Union[str, BloodGroup],
        units_available: Optional[int] = None,
        status: Optional[Union[str, InventoryStatus]] = None,
    ) -> BloodInventory:
        """
        Update the row for a blood group, creating it if missing.

        Status is whatever the administrator chose; it is never derived
        from the unit count.
        """
        group = parse_blood_group(blood_group)

        if units_available is not None:
            if isinstance(units_available, bool) or not isinstance(units_available, int) or units_available < 0:
                raise ValidationError("units_available must be a non-negative integer")

        status_value = None
        if status is not None:
            try:
                status_value = InventoryStatus(status).value
            except ValueError:
                allowed = ", ".join(s.value for s in InventoryStatus)
                raise ValidationError(f"Invalid inventory status '{status}'. Expected one of: {allowed}")

        inventory = self.get_inventory_by_group(group)
        if inventory:
            if units_available is not None:
                inventory.units_available = units_available
            if status_value is not None:
                inventory.status = status_value
            inventory.last_updated = datetime.utcnow()
        else:
            inventory = BloodInventory(
                blood_group=group,
                units_available=units_available if units_available is not None else 0,
                status=status_value or InventoryStatus.AVAILABLE.value,
            )
            self.db.add(inventory)
        self.db.commit()
        self.db.refresh(inventory)

        logger.info(
            f"Inventory {group.value}: {inventory.units_available} unit(s), status {inventory.status}"
        )
        return inventory

    def initialize_inventory(self) -> int:
        """Give every blood group a row; missing groups start at 0 units, urgent."""
        existing = {row.blood_group for row in self.db.query(BloodInventory).all()}
        created = 0
        for group in BloodGroup:
            if group in existing:
                continue
            self.db.add(BloodInventory(
                blood_group=group,
                units_available=0,
                status=InventoryStatus.URGENT.value,
            ))
            created += 1
        if created:
            self.db.commit()
            logger.info(f"Initialized inventory rows for {created} blood group(s)")
        return created

    # ----------------------------------------------------------------- stats

    def get_admin_stats(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        return StatsService.get_admin_stats(self.db, now)

    def get_public_stats(self) -> Dict[str, Any]:
        return StatsService.get_public_stats(self.db)
