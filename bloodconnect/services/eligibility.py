"""
Donation eligibility window.

A donor may give blood again once ELIGIBILITY_DAYS have elapsed since their
last donation. Donors within ELIGIBLE_SOON_DAYS of that point are flagged
as "eligible soon" so coordinators can plan ahead.
"""
import enum
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

ELIGIBILITY_DAYS = 90
ELIGIBLE_SOON_DAYS = 14

_ONE_DAY = timedelta(days=1)


class EligibilityBand(str, enum.Enum):
    ELIGIBLE = "eligible"
    ELIGIBLE_SOON = "eligible_soon"
    NOT_ELIGIBLE = "not_eligible"


@dataclass(frozen=True)
class Eligibility:
    band: EligibilityBand
    days_since_last_donation: Optional[int] = None
    days_remaining: Optional[int] = None

    @property
    def is_eligible(self) -> bool:
        return self.band == EligibilityBand.ELIGIBLE

    @property
    def label(self) -> str:
        if self.band == EligibilityBand.ELIGIBLE:
            if self.days_since_last_donation is None:
                return "Eligible"
            return f"Eligible ({self.days_since_last_donation} days)"
        if self.band == EligibilityBand.ELIGIBLE_SOON:
            return f"{self.days_remaining} days left"
        return f"Not Eligible ({self.days_remaining} days)"


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def days_since(last_donation_date: datetime, now: Optional[datetime] = None) -> int:
    """Whole days elapsed since the last donation, rounded up."""
    now = _as_naive_utc(now or datetime.utcnow())
    elapsed = abs(now - _as_naive_utc(last_donation_date))
    return math.ceil(elapsed / _ONE_DAY)


def evaluate_eligibility(
    last_donation_date: Optional[datetime],
    now: Optional[datetime] = None,
) -> Eligibility:
    """Classify a donor by time since their last donation.

    Naive datetimes are treated as UTC. Passing the same ``now`` always
    yields the same result.
    """
    if last_donation_date is None:
        return Eligibility(band=EligibilityBand.ELIGIBLE)

    elapsed_days = days_since(last_donation_date, now)
    if elapsed_days >= ELIGIBILITY_DAYS:
        return Eligibility(
            band=EligibilityBand.ELIGIBLE,
            days_since_last_donation=elapsed_days,
        )

    remaining = ELIGIBILITY_DAYS - elapsed_days
    band = EligibilityBand.ELIGIBLE_SOON if remaining <= ELIGIBLE_SOON_DAYS else EligibilityBand.NOT_ELIGIBLE
    return Eligibility(
        band=band,
        days_since_last_donation=elapsed_days,
        days_remaining=remaining,
    )


def next_eligible_date(last_donation_date: Optional[datetime]) -> Optional[datetime]:
    if last_donation_date is None:
        return None
    return _as_naive_utc(last_donation_date) + timedelta(days=ELIGIBILITY_DAYS)
