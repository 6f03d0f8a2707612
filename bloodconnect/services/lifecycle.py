"""
Approval and processing lifecycles as explicit transition tables.

Anything not listed in a machine's table is rejected with InvalidStateError,
so callers can validate a target before touching the database.
"""
import enum
from typing import Dict, FrozenSet, Type, Union

from bloodconnect.core.exceptions import InvalidStateError
from bloodconnect.models.donor import ApprovalStatus
from bloodconnect.models.blood_request import RequestStatus


class StateMachine:
    """A finite set of states plus the allowed (state -> target) moves."""

    def __init__(self, name: str, states: Type[enum.Enum], transitions: Dict[enum.Enum, FrozenSet[enum.Enum]]):
        self.name = name
        self.states = states
        self.transitions = transitions

    def parse(self, value: Union[str, enum.Enum]) -> enum.Enum:
        """Coerce a raw value to a state, or raise InvalidStateError."""
        try:
            return self.states(value)
        except ValueError:
            allowed = ", ".join(s.value for s in self.states)
            raise InvalidStateError(
                f"Invalid {self.name} '{value}'. Expected one of: {allowed}",
                target=str(value),
            )

    def allowed_targets(self, current: Union[str, enum.Enum]) -> FrozenSet[enum.Enum]:
        return self.transitions.get(self.parse(current), frozenset())

    def is_terminal(self, current: Union[str, enum.Enum]) -> bool:
        return not self.allowed_targets(current)

    def can_transition(self, current: Union[str, enum.Enum], target: Union[str, enum.Enum]) -> bool:
        try:
            return self.parse(target) in self.allowed_targets(current)
        except InvalidStateError:
            return False

    def transition(self, current: Union[str, enum.Enum], target: Union[str, enum.Enum]) -> enum.Enum:
        """Return the new state, or raise InvalidStateError leaving the caller's state untouched."""
        current_state = self.parse(current)
        target_state = self.parse(target)
        if target_state not in self.transitions.get(current_state, frozenset()):
            raise InvalidStateError(
                f"Cannot change {self.name} from '{current_state.value}' to '{target_state.value}'",
                current=current_state.value,
                target=target_state.value,
            )
        return target_state


# Approval decisions are final: there is no re-review path.
APPROVAL_LIFECYCLE = StateMachine(
    "approval status",
    ApprovalStatus,
    {
        ApprovalStatus.PENDING: frozenset({ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}),
        ApprovalStatus.APPROVED: frozenset(),
        ApprovalStatus.REJECTED: frozenset(),
    },
)

DONOR_APPROVAL = APPROVAL_LIFECYCLE
REQUEST_APPROVAL = APPROVAL_LIFECYCLE

REQUEST_PROCESSING = StateMachine(
    "request status",
    RequestStatus,
    {
        RequestStatus.PENDING: frozenset({RequestStatus.IN_PROGRESS, RequestStatus.CANCELLED}),
        RequestStatus.IN_PROGRESS: frozenset({RequestStatus.COMPLETED, RequestStatus.CANCELLED}),
        RequestStatus.COMPLETED: frozenset(),
        RequestStatus.CANCELLED: frozenset(),
    },
)
