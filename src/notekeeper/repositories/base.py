"""Store contracts.

Services depend on these protocols only; ``repositories.user`` and
``repositories.note`` provide the SQLAlchemy implementations. Lookups signal
"not found" with ``None``; any backing-store failure surfaces as
``StoreError``.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence

from notekeeper.models.note import Note
from notekeeper.models.user import User

__all__ = [
    "ListStrategy",
    "NoteQuery",
    "UserStore",
    "NoteStore",
]


class ListStrategy(str, enum.Enum):
    """Retrieval strategies for note listing, in dispatch precedence order."""
    USER_DATE_RANGE = "user_date_range"
    DATE_RANGE = "date_range"
    USER_DAY = "user_day"
    DAY = "day"
    USER = "user"
    ALL = "all"


@dataclass(frozen=True)
class NoteQuery:
    """A fully resolved listing query.

    ``created_from`` is always inclusive. ``created_to`` is inclusive for the
    range strategies and exclusive for the day strategies; both bounds are
    ``None`` for the remaining strategies. ``user_id`` is set exactly for
    the ``USER*`` strategies.
    """
    strategy: ListStrategy
    limit: int
    offset: int
    user_id: Optional[int] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None

    @property
    def end_inclusive(self) -> bool:
        return self.strategy in (ListStrategy.USER_DATE_RANGE, ListStrategy.DATE_RANGE)


class UserStore(Protocol):
    async def create_user(self, *, username: str, password_hash: str) -> User: ...

    async def get_by_id(self, user_id: int) -> Optional[User]: ...

    async def get_by_username(self, username: str) -> Optional[User]: ...


class NoteStore(Protocol):
    async def insert(
        self,
        *,
        user_id: int,
        title: str,
        text: str,
        created_at: datetime,
        author: str,
    ) -> Note: ...

    async def get_by_id(self, note_id: int) -> Optional[Note]: ...

    async def update(self, note: Note, *, title: str, text: str, author: str) -> Note: ...

    async def delete(self, note: Note) -> None: ...

    async def list_notes(self, query: NoteQuery) -> Sequence[Note]: ...
