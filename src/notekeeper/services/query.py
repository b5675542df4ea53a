"""Note listing: filter parsing, strategy selection and result enrichment.

Exactly one retrieval strategy is chosen per request, first match wins:

1. ``start_date`` + ``end_date`` + ``username``  -> user's notes in the range
2. ``start_date`` + ``end_date``                 -> everyone's notes in the range
3. ``date`` + ``username``                       -> user's notes on that day
4. ``date``                                      -> everyone's notes on that day
5. ``username``                                  -> user's notes, all time
6. nothing                                       -> all notes

A range runs from ``start_date`` 00:00 UTC up to and including ``end_date``
00:00 UTC, so notes written later on the end day fall outside it. Every
strategy orders by ``created_at`` descending and pages with
``LIMIT page_size OFFSET (page - 1) * page_size``.

Input problems abort before any note query: malformed dates raise
``InvalidDateFormatError`` and an unresolvable username raises
``UnknownUserError``.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Sequence

from notekeeper.core.errors import InvalidDateFormatError, UnknownUserError, StoreError
from notekeeper.models.note import Note
from notekeeper.repositories.base import ListStrategy, NoteQuery, NoteStore, UserStore

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "FilterCriteria",
    "ListedNote",
    "parse_date",
    "parse_filters",
    "select_strategy",
    "build_query",
    "resolve_query",
    "enrich_notes",
    "list_notes",
]

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_USER_STRATEGIES = (ListStrategy.USER_DATE_RANGE, ListStrategy.USER_DAY, ListStrategy.USER)


@dataclass(frozen=True)
class FilterCriteria:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    day: Optional[date] = None
    username: Optional[str] = None
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1 or self.page_size < 1:
            raise ValueError("page and page_size must be >= 1")

    @property
    def has_range(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class ListedNote:
    """A listing row. ``belongs_to_current_user`` is ``True`` or ``None``, never ``False``."""
    id: int
    title: str
    text: str
    author: str
    created_at: datetime
    belongs_to_current_user: Optional[bool] = None


def parse_date(field: str, value: Optional[str]) -> Optional[date]:
    if value is None or value == "":
        return None
    if not _DATE_RE.match(value):
        raise InvalidDateFormatError(field, value)
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateFormatError(field, value) from e


def _positive_int(value: Optional[str | int], default: int) -> int:
    try:
        parsed = int(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def parse_filters(
    *,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    date: Optional[str] = None,
    username: Optional[str] = None,
    page: Optional[str | int] = None,
    limit: Optional[str | int] = None,
) -> FilterCriteria:
    """Build ``FilterCriteria`` from raw query-string values.

    Empty strings count as absent. Page values that are not positive
    integers fall back to the defaults rather than failing.
    """
    return FilterCriteria(
        start_date=parse_date("start_date", start_date),
        end_date=parse_date("end_date", end_date),
        day=parse_date("date", date),
        username=username or None,
        page=_positive_int(page, DEFAULT_PAGE),
        page_size=_positive_int(limit, DEFAULT_PAGE_SIZE),
    )


def select_strategy(criteria: FilterCriteria) -> ListStrategy:
    has_user = criteria.username is not None
    if criteria.has_range and has_user:
        return ListStrategy.USER_DATE_RANGE
    if criteria.has_range:
        return ListStrategy.DATE_RANGE
    if criteria.day is not None and has_user:
        return ListStrategy.USER_DAY
    if criteria.day is not None:
        return ListStrategy.DAY
    if has_user:
        return ListStrategy.USER
    return ListStrategy.ALL


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def build_query(criteria: FilterCriteria, user_id: Optional[int] = None) -> NoteQuery:
    strategy = select_strategy(criteria)
    created_from = created_to = None
    if strategy in (ListStrategy.USER_DATE_RANGE, ListStrategy.DATE_RANGE):
        created_from = _day_start(criteria.start_date)  # type: ignore[arg-type]
        created_to = _day_start(criteria.end_date)  # type: ignore[arg-type]
    elif strategy in (ListStrategy.USER_DAY, ListStrategy.DAY):
        created_from = _day_start(criteria.day)  # type: ignore[arg-type]
        created_to = created_from + timedelta(days=1)
    return NoteQuery(
        strategy=strategy,
        limit=criteria.page_size,
        offset=criteria.offset,
        user_id=user_id if strategy in _USER_STRATEGIES else None,
        created_from=created_from,
        created_to=created_to,
    )


async def resolve_query(criteria: FilterCriteria, users: UserStore) -> NoteQuery:
    user_id = None
    if criteria.username is not None:
        user = await users.get_by_username(criteria.username)
        if user is None:
            raise UnknownUserError(criteria.username)
        user_id = user.id
    return build_query(criteria, user_id)


async def enrich_notes(
    notes: Sequence[Note],
    current_user_id: int,
    users: UserStore,
) -> list[ListedNote]:
    usernames: dict[int, str] = {}
    listed: list[ListedNote] = []
    for note in notes:
        if note.user_id not in usernames:
            owner = await users.get_by_id(note.user_id)
            if owner is None:
                # FK guarantees an owner; a miss means the store is inconsistent
                logger.error("note owner missing", extra={"note_id": note.id, "user_id": note.user_id})
                raise StoreError()
            usernames[note.user_id] = owner.username
        listed.append(
            ListedNote(
                id=note.id,
                title=note.title,
                text=note.text,
                author=usernames[note.user_id],
                created_at=note.created_at,
                belongs_to_current_user=True if note.user_id == current_user_id else None,
            )
        )
    return listed


async def list_notes(
    criteria: FilterCriteria,
    *,
    current_user_id: int,
    notes: NoteStore,
    users: UserStore,
) -> list[ListedNote]:
    query = await resolve_query(criteria, users)
    logger.debug(
        "listing notes",
        extra={"strategy": query.strategy.value, "limit": query.limit, "offset": query.offset},
    )
    rows = await notes.list_notes(query)
    return await enrich_notes(rows, current_user_id, users)
