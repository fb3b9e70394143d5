"""
Booking status transitions.

Every status change goes through :func:`transition`. Asking for the status a
booking already has is a successful no-op, provided the actor could have
made that transition in the first place.
"""

from django.utils import timezone

from booking.models import Booking
from common.exceptions import InvalidTransition

Status = Booking.BookingStatus
Actor = Booking.Actor

ACTIVE_STATUSES = (Status.PENDING, Status.CONFIRMED, Status.CHECKED_IN)
RESCHEDULABLE_STATUSES = (Status.PENDING, Status.CONFIRMED)
TERMINAL_STATUSES = (Status.CANCELLED, Status.COMPLETED)

TRANSITIONS = {
    (Status.PENDING, Status.CONFIRMED): frozenset({Actor.HOST, Actor.PAYMENT}),
    (Status.PENDING, Status.CANCELLED): frozenset({Actor.HOST, Actor.GUEST}),
    (Status.CONFIRMED, Status.CANCELLED): frozenset({Actor.GUEST}),
    (Status.CONFIRMED, Status.CHECKED_IN): frozenset({Actor.HOST}),
    (Status.CHECKED_IN, Status.CHECKED_OUT): frozenset({Actor.HOST}),
    (Status.CHECKED_OUT, Status.COMPLETED): frozenset({Actor.SYSTEM}),
}

TIMESTAMP_FIELDS = {
    Status.CONFIRMED: "confirmed_at",
    Status.CHECKED_IN: "checked_in_at",
    Status.CHECKED_OUT: "checked_out_at",
    Status.COMPLETED: "completed_at",
    Status.CANCELLED: "cancelled_at",
}


def can_transition(source, target, actor) -> bool:
    return actor in TRANSITIONS.get((source, target), ())


def can_reach(target, actor) -> bool:
    """Whether ``actor`` may move any booking into ``target``."""
    return any(
        actor in actors
        for (_, to_status), actors in TRANSITIONS.items()
        if to_status == target
    )


def transition(booking: Booking, target, actor, now=None) -> list:
    """
    Move ``booking`` to ``target`` on behalf of ``actor``.

    Returns the names of the fields that were changed (empty for a no-op
    retry). The booking is not saved. Raises ``InvalidTransition`` without
    touching the booking when the move is not allowed.
    """
    if booking.status == target:
        if can_reach(target, actor):
            return []
        raise InvalidTransition(f"A {actor} cannot mark a booking as {target}.")

    if not can_transition(booking.status, target, actor):
        raise InvalidTransition(
            f"Cannot move a {booking.status} booking to {target}."
        )

    booking.status = target
    changed = ["status"]

    timestamp_field = TIMESTAMP_FIELDS.get(target)
    if timestamp_field:
        setattr(booking, timestamp_field, now or timezone.now())
        changed.append(timestamp_field)

    return changed
