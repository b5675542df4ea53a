"""SQLAlchemy implementation of the note store.

The six listing strategies share one statement builder: every strategy is
the same ``SELECT`` ordered by ``created_at DESC`` with ``LIMIT``/``OFFSET``,
differing only in which of the owner / time-window predicates apply.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import Select, select

from notekeeper.core.errors import StoreError
from notekeeper.models.note import Note
from notekeeper.repositories.base import ListStrategy, NoteQuery

__all__ = [
    "SqlNoteStore",
    "build_list_statement",
]

logger = logging.getLogger(__name__)

_USER_STRATEGIES = {ListStrategy.USER_DATE_RANGE, ListStrategy.USER_DAY, ListStrategy.USER}
_WINDOW_STRATEGIES = {
    ListStrategy.USER_DATE_RANGE,
    ListStrategy.DATE_RANGE,
    ListStrategy.USER_DAY,
    ListStrategy.DAY,
}


def build_list_statement(query: NoteQuery) -> Select:
    stmt = select(Note)
    if query.strategy in _USER_STRATEGIES:
        stmt = stmt.where(Note.user_id == query.user_id)
    if query.strategy in _WINDOW_STRATEGIES:
        upper = (
            Note.created_at <= query.created_to
            if query.end_inclusive
            else Note.created_at < query.created_to
        )
        stmt = stmt.where(Note.created_at >= query.created_from, upper)
    # id breaks ties between notes created in the same instant
    return (
        stmt.order_by(Note.created_at.desc(), Note.id.desc())
        .limit(query.limit)
        .offset(query.offset)
    )


class SqlNoteStore:
    """``NoteStore`` backed by an ``AsyncSession`` (flushes, never commits)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def insert(
        self,
        *,
        user_id: int,
        title: str,
        text: str,
        created_at: datetime,
        author: str,
    ) -> Note:
        note = Note(user_id=user_id, title=title, text=text, created_at=created_at, author=author)
        self.session.add(note)
        # Flush so the INSERT is issued and the id is assigned, then refresh to
        # eagerly load every column. Lazy loads during serialization raise
        # MissingGreenlet under async SQLAlchemy.
        await self._flush(note, "insert")
        return note

    async def get_by_id(self, note_id: int) -> Optional[Note]:
        try:
            res = await self.session.execute(select(Note).where(Note.id == note_id))
        except SQLAlchemyError as e:
            logger.exception("note lookup failed", extra={"note_id": note_id})
            raise StoreError() from e
        return res.scalar_one_or_none()

    async def update(self, note: Note, *, title: str, text: str, author: str) -> Note:
        note.title = title
        note.text = text
        note.author = author
        await self._flush(note, "update")
        return note

    async def delete(self, note: Note) -> None:
        try:
            await self.session.delete(note)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.exception("note delete failed", extra={"note_id": note.id})
            raise StoreError() from e

    async def list_notes(self, query: NoteQuery) -> Sequence[Note]:
        try:
            res = await self.session.execute(build_list_statement(query))
        except SQLAlchemyError as e:
            logger.exception("note listing failed", extra={"strategy": query.strategy})
            raise StoreError() from e
        return list(res.scalars().all())

    async def _flush(self, note: Note, op: str) -> None:
        try:
            await self.session.flush()
            await self.session.refresh(note)
        except SQLAlchemyError as e:
            logger.exception("note %s failed", op, extra={"user_id": note.user_id})
            raise StoreError() from e
