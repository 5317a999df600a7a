"""Self-service profile edit gate.

Before onboarding is completed an employee can always edit their profile.
Afterwards each save locks the profile for a rolling window
(PROFILE_LOCK_HOURS, 12 by default) and edits are refused until it elapses.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

DEFAULT_LOCK_HOURS = 12


def as_utc(value):
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GateState:
    editable: bool
    locked_until: Optional[datetime] = None

    @classmethod
    def open(cls):
        return cls(editable=True)

    @classmethod
    def locked(cls, until):
        return cls(editable=False, locked_until=until)


def evaluate(onboarding_completed, locked_until, now) -> GateState:
    if not onboarding_completed:
        return GateState.open()
    until = as_utc(locked_until)
    if until is not None and until > as_utc(now):
        return GateState.locked(until)
    return GateState.open()


def remaining(state: GateState, now) -> Optional[timedelta]:
    if state.editable or state.locked_until is None:
        return None
    return max(state.locked_until - as_utc(now), timedelta(0))


def format_remaining(locked_until, now) -> str:
    """Time left on a lock as ``"{hours}h {minutes}m"``; minutes are truncated."""
    left = max(as_utc(locked_until) - as_utc(now), timedelta(0))
    total_minutes = int(left.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


def next_lock(now, hours=DEFAULT_LOCK_HOURS) -> datetime:
    return as_utc(now) + timedelta(hours=hours)


def describe(onboarding_completed, locked_until, now):
    """Gate state in the shape returned alongside a user profile."""
    state = evaluate(onboarding_completed, locked_until, now)
    return {
        "can_edit": state.editable,
        "time_until_editable": None if state.editable else format_remaining(state.locked_until, now),
    }


def apply_self_edit(user, now, hours=DEFAULT_LOCK_HOURS, completes_onboarding=False):
    """Record a successful self-service save on ``user``.

    Saves made before onboarding never lock. The department selection save
    (``completes_onboarding``) flips onboarding on and leaves the profile
    unlocked; every save after that starts a new lock window. Stored
    timestamps are naive UTC.
    """
    if not user.onboarding_completed:
        if completes_onboarding:
            user.onboarding_completed = True
            user.is_locked_until = None
    else:
        user.is_locked_until = next_lock(now, hours).replace(tzinfo=None)
    return user
