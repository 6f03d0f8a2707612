"""
Dashboard aggregation. Counts are recomputed from the tables on every call.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from bloodconnect.models.donor import Donor, ApprovalStatus
from bloodconnect.models.blood_request import BloodRequest, RequestStatus
from bloodconnect.models.donation import Donation

logger = logging.getLogger(__name__)


def start_of_local_day(now: Optional[datetime] = None) -> datetime:
    """Midnight of the server's current local day, as naive UTC (the storage convention).

    A naive ``now`` is read as UTC, like every stored timestamp.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local_now = now.astimezone()
    local_midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return local_midnight.astimezone(timezone.utc).replace(tzinfo=None)


def completion_rate(completed: int, total: int) -> int:
    if not total:
        return 0
    return round(completed / total * 100)


class StatsService:
    """Read-only projections over donors, requests and donations."""

    @staticmethod
    def _count(db: Session, column, *criteria) -> int:
        query = db.query(func.count(column))
        if criteria:
            query = query.filter(*criteria)
        return query.scalar() or 0

    @classmethod
    def count_active_requests(cls, db: Session) -> int:
        return cls._count(
            db,
            BloodRequest.id,
            BloodRequest.approval_status == ApprovalStatus.APPROVED,
            BloodRequest.status == RequestStatus.PENDING,
        )

    @classmethod
    def count_completed_requests(cls, db: Session) -> int:
        return cls._count(db, BloodRequest.id, BloodRequest.status == RequestStatus.COMPLETED)

    @classmethod
    def count_approved_donors(cls, db: Session) -> int:
        return cls._count(db, Donor.id, Donor.approval_status == ApprovalStatus.APPROVED)

    @classmethod
    def get_admin_stats(cls, db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
        total_requests = cls._count(db, BloodRequest.id)
        completed_requests = cls.count_completed_requests(db)

        stats = {
            "total_donors": cls._count(db, Donor.id),
            "approved_donors": cls.count_approved_donors(db),
            "pending_donors": cls._count(db, Donor.id, Donor.approval_status == ApprovalStatus.PENDING),
            "total_requests": total_requests,
            "active_requests": cls.count_active_requests(db),
            "completed_requests": completed_requests,
            "total_donations": cls._count(db, Donation.id),
            "today_donations": cls._count(db, Donation.id, Donation.donation_date >= start_of_local_day(now)),
            "completion_rate": completion_rate(completed_requests, total_requests),
        }
        logger.debug(f"Admin stats computed: {stats}")
        return stats

    @classmethod
    def get_public_stats(cls, db: Session) -> Dict[str, Any]:
        # Only approved donors are ever counted publicly
        return {
            "total_donors": cls.count_approved_donors(db),
            "total_donations": cls._count(db, Donation.id),
            "active_requests": cls.count_active_requests(db),
            "completed_requests": cls.count_completed_requests(db),
        }
