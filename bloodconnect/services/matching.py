"""
Donor matching: approved donors with the exact requested blood group,
optionally narrowed to those whose city contains the requested city.

No ABO/Rh cross-compatibility is applied; an O- donor is only offered for
O- requests.
"""
from typing import Iterable, List, Optional

from bloodconnect.models.donor import ApprovalStatus, BloodGroup, Donor


def city_matches(donor_city: Optional[str], city: Optional[str]) -> bool:
    """Case-insensitive substring match. A blank city matches everything."""
    wanted = (city or "").strip().lower()
    if not wanted:
        return True
    return wanted in (donor_city or "").lower()


def donor_matches(donor: Donor, blood_group: BloodGroup, city: Optional[str] = None) -> bool:
    return (
        donor.approval_status == ApprovalStatus.APPROVED
        and donor.blood_group == blood_group
        and city_matches(donor.city, city)
    )


def filter_matching_donors(
    donors: Iterable[Donor],
    blood_group: BloodGroup,
    city: Optional[str] = None,
) -> List[Donor]:
    return [donor for donor in donors if donor_matches(donor, blood_group, city)]
