"""Status lifecycle shared by assessments and appraisals.

Rows move one step at a time through PENDING, IN_PROGRESS, COMPLETED and
REVIEWED. ``started_at`` and ``completed_at`` are each stamped once.
"""
STATUSES = ("PENDING", "IN_PROGRESS", "COMPLETED", "REVIEWED")
TERMINAL_STATUSES = ("COMPLETED", "REVIEWED")


class TransitionError(ValueError):
    pass


def check_transition(current, target) -> bool:
    """True when ``target`` is the next step, False when it is the current one."""
    if target not in STATUSES:
        raise TransitionError(f"Unknown status {target}")
    if target == current:
        return False
    if STATUSES.index(target) != STATUSES.index(current) + 1:
        raise TransitionError(f"Cannot move from {current} to {target}")
    return True


def apply_status(row, target, now) -> bool:
    """Move ``row`` to ``target``; returns True when this call completed it."""
    if not check_transition(row.status, target):
        return False
    if target == "IN_PROGRESS" and row.started_at is None:
        row.started_at = now
    completing = target == "COMPLETED" and row.completed_at is None
    if completing:
        row.completed_at = now
    row.status = target
    return completing


def is_closed(row) -> bool:
    return row.status in TERMINAL_STATUSES
