"""Note service layer.

Orchestrates create / edit / delete over the note and user stores and raises
domain-specific exceptions instead of returning ``None``. Authorization
decisions come from ``services.access``; listing lives in ``services.query``.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from notekeeper.core.errors import NotFoundError, UnauthorizedError, ValidationError, StoreError
from notekeeper.models.note import Note
from notekeeper.repositories.base import NoteStore, UserStore
from notekeeper.services.access import (
    EDIT_WINDOW,
    Operation,
    can_delete,
    can_mutate,
    ensure_allowed,
)

__all__ = [
    "DEFAULT_MAX_LENGTH",
    "validate_note_length",
    "get_note_or_404",
    "create_note",
    "edit_note",
    "delete_note",
]

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 1000


def validate_note_length(title: str, text: str, max_length: int = DEFAULT_MAX_LENGTH) -> None:
    if len(title) > max_length or len(text) > max_length:
        raise ValidationError(f"Title and text are limited to {max_length} characters")


async def get_note_or_404(notes: NoteStore, note_id: int) -> Note:
    note = await notes.get_by_id(note_id)
    if note is None:
        raise NotFoundError()
    return note


async def create_note(
    notes: NoteStore,
    users: UserStore,
    *,
    requester_id: int,
    title: str,
    text: str,
    now: datetime,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> Note:
    validate_note_length(title, text, max_length)
    requester = await users.get_by_id(requester_id)
    if requester is None:
        # valid signature, but the account behind it is gone
        raise UnauthorizedError()
    note = await notes.insert(
        user_id=requester.id,
        title=title,
        text=text,
        created_at=now,
        author=requester.username,
    )
    logger.info("note created", extra={"note_id": note.id, "user_id": requester.id})
    return note


async def edit_note(
    notes: NoteStore,
    users: UserStore,
    *,
    note_id: int,
    requester_id: int,
    title: str,
    text: str,
    now: datetime,
    max_length: int = DEFAULT_MAX_LENGTH,
    edit_window: timedelta = EDIT_WINDOW,
) -> Note:
    note = await get_note_or_404(notes, note_id)
    decision = can_mutate(requester_id, note, now, Operation.EDIT, edit_window)
    if not decision.allowed:
        logger.info(
            "note edit refused",
            extra={"note_id": note_id, "user_id": requester_id, "reason": decision.reason},
        )
    ensure_allowed(decision)
    validate_note_length(title, text, max_length)
    owner = await users.get_by_id(note.user_id)
    if owner is None:
        logger.error("note owner missing", extra={"note_id": note_id, "user_id": note.user_id})
        raise StoreError()
    note = await notes.update(note, title=title, text=text, author=owner.username)
    logger.info("note updated", extra={"note_id": note_id, "user_id": requester_id})
    return note


async def delete_note(notes: NoteStore, *, note_id: int, requester_id: int) -> None:
    note = await get_note_or_404(notes, note_id)
    decision = can_delete(requester_id, note)
    if not decision.allowed:
        logger.info(
            "note delete refused",
            extra={"note_id": note_id, "user_id": requester_id, "reason": decision.reason},
        )
    ensure_allowed(decision)
    await notes.delete(note)
    logger.info("note deleted", extra={"note_id": note_id, "user_id": requester_id})
