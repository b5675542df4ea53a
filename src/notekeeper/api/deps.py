"""Centralized FastAPI dependency definitions for the API layer.

Routers should import dependencies from here instead of directly from
their underlying implementation modules. This provides:

* A stable import surface (refactors in lower layers don't ripple up)
* Easier test overrides via ``app.dependency_overrides[deps.get_now]``
* Store construction in one place: routers receive ``UserStore`` /
  ``NoteStore`` implementations bound to the request's session
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.config import get_settings
from notekeeper.core.auth import get_current_user_id, get_now, get_token_service
from notekeeper.db.session import get_db
from notekeeper.repositories.note import SqlNoteStore
from notekeeper.repositories.user import SqlUserStore


def get_user_store(session: AsyncSession = Depends(get_db)) -> SqlUserStore:
    return SqlUserStore(session)


def get_note_store(session: AsyncSession = Depends(get_db)) -> SqlNoteStore:
    return SqlNoteStore(session)


__all__ = [
    "get_db",
    "get_settings",
    "get_now",
    "get_token_service",
    "get_current_user_id",
    "get_user_store",
    "get_note_store",
]
