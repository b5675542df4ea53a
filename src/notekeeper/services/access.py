"""Note access decisions.

Pure functions of their inputs; no I/O and no state. Callers resolve a
missing note to ``NotFoundError`` before asking for a decision.

Edits are limited to the owner within the edit window counted from
``created_at``; deletes are limited to the owner with no time restriction.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from notekeeper.core.errors import ForbiddenError, ForbiddenReason
from notekeeper.models.note import Note

__all__ = [
    "EDIT_WINDOW",
    "Operation",
    "Decision",
    "ALLOWED",
    "can_mutate",
    "can_delete",
    "ensure_allowed",
    "as_utc",
]

EDIT_WINDOW = timedelta(hours=24)


class Operation(str, enum.Enum):
    EDIT = "edit"
    DELETE = "delete"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[ForbiddenReason] = None

    @classmethod
    def forbid(cls, reason: ForbiddenReason) -> "Decision":
        return cls(allowed=False, reason=reason)


ALLOWED = Decision(allowed=True)


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes (SQLite returns those) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def can_mutate(
    requester_id: int,
    note: Note,
    now: datetime,
    operation: Operation = Operation.EDIT,
    edit_window: timedelta = EDIT_WINDOW,
) -> Decision:
    if note.user_id != requester_id:
        return Decision.forbid(ForbiddenReason.NOT_OWNER)
    if operation is Operation.EDIT and as_utc(now) - as_utc(note.created_at) > edit_window:
        return Decision.forbid(ForbiddenReason.EDIT_WINDOW_EXPIRED)
    return ALLOWED


def can_delete(requester_id: int, note: Note) -> Decision:
    if note.user_id != requester_id:
        return Decision.forbid(ForbiddenReason.NOT_OWNER)
    return ALLOWED


def ensure_allowed(decision: Decision) -> None:
    if not decision.allowed:
        raise ForbiddenError(decision.reason)  # type: ignore[arg-type]
