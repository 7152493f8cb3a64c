"""
Order status state machine. Pure decision logic, no I/O.
"""

from typing import Dict, FrozenSet, Tuple

from ..errors import TransitionError

PENDING = "pending"
PROCESSING = "processing"
COMPLETED = "completed"
CANCELLED = "cancelled"

ORDER_STATUSES: Tuple[str, ...] = (PENDING, PROCESSING, COMPLETED, CANCELLED)
TERMINAL_STATUSES: FrozenSet[str] = frozenset({COMPLETED, CANCELLED})

# Current status -> allowed next status
ALLOWED_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    PENDING: (PROCESSING, CANCELLED),
    PROCESSING: (COMPLETED,),
    COMPLETED: (),
    CANCELLED: (),
}


def can_transition(current: str, requested: str) -> bool:
    """True if an order in ``current`` may move to ``requested``.

    Checked in order: completed orders never move, cancellation is only
    possible from pending, everything else goes through the table.
    """
    if current == COMPLETED:
        return False

    if requested == CANCELLED:
        return current == PENDING

    return requested in ALLOWED_TRANSITIONS.get(current, ())


def assert_can_transition(order, requested: str) -> None:
    """Raise TransitionError unless ``order.status`` may move to ``requested``."""
    if not can_transition(order.status, requested):
        raise TransitionError(order.status, requested)
