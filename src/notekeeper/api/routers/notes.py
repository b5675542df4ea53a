from datetime import datetime, timedelta
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.api import deps
from notekeeper.core.config import Settings
from notekeeper.repositories.note import SqlNoteStore
from notekeeper.repositories.user import SqlUserStore
from notekeeper.schemas.base import MessageResponse
from notekeeper.schemas.note import NoteListItem, NoteRead, NoteWrite
from notekeeper.services.note import create_note, edit_note, delete_note
from notekeeper.services.query import list_notes, parse_filters

router = APIRouter(tags=["notes"])


@router.post("/note", response_model=NoteRead, summary="Create a note")
async def create_note_route(
    payload: NoteWrite,
    session: AsyncSession = Depends(deps.get_db),
    notes: SqlNoteStore = Depends(deps.get_note_store),
    users: SqlUserStore = Depends(deps.get_user_store),
    current_user_id: int = Depends(deps.get_current_user_id),
    settings: Settings = Depends(deps.get_settings),
    now: datetime = Depends(deps.get_now),
):
    note = await create_note(
        notes,
        users,
        requester_id=current_user_id,
        title=payload.title,
        text=payload.text,
        now=now,
        max_length=settings.note_max_length,
    )
    await session.commit()
    return note  # type: ignore


@router.put(
    "/note/{note_id}",
    response_model=NoteRead,
    summary="Edit a note",
    description="Only the owner may edit, and only within the edit window after creation.",
)
async def edit_note_route(
    note_id: int,
    payload: NoteWrite,
    session: AsyncSession = Depends(deps.get_db),
    notes: SqlNoteStore = Depends(deps.get_note_store),
    users: SqlUserStore = Depends(deps.get_user_store),
    current_user_id: int = Depends(deps.get_current_user_id),
    settings: Settings = Depends(deps.get_settings),
    now: datetime = Depends(deps.get_now),
):
    note = await edit_note(
        notes,
        users,
        note_id=note_id,
        requester_id=current_user_id,
        title=payload.title,
        text=payload.text,
        now=now,
        max_length=settings.note_max_length,
        edit_window=timedelta(hours=settings.edit_window_hours),
    )
    await session.commit()
    return note  # type: ignore


@router.delete("/note/{note_id}", response_model=MessageResponse, summary="Delete a note")
async def delete_note_route(
    note_id: int,
    session: AsyncSession = Depends(deps.get_db),
    notes: SqlNoteStore = Depends(deps.get_note_store),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    await delete_note(notes, note_id=note_id, requester_id=current_user_id)
    await session.commit()
    return MessageResponse(message="Note deleted successfully")


@router.get(
    "/notes",
    response_model=list[NoteListItem],
    response_model_exclude_none=True,
    summary="List notes",
    description="Filter by date range, single day and/or username; dates are 'YYYY-MM-DD'.",
)
async def list_notes_route(
    start_date: Optional[str] = Query(None, description="Range start, 'YYYY-MM-DD'"),
    end_date: Optional[str] = Query(None, description="Range end, 'YYYY-MM-DD'; bounded at 00:00 UTC of that day"),
    username: Optional[str] = Query(None, description="Only notes by this user"),
    date: Optional[str] = Query(None, description="Single day, 'YYYY-MM-DD'"),
    # raw strings: invalid paging values fall back to defaults instead of 422
    page: Optional[str] = Query(None, description="Page number, default 1"),
    limit: Optional[str] = Query(None, description="Page size, default 10"),
    notes: SqlNoteStore = Depends(deps.get_note_store),
    users: SqlUserStore = Depends(deps.get_user_store),
    current_user_id: int = Depends(deps.get_current_user_id),
):
    criteria = parse_filters(
        start_date=start_date,
        end_date=end_date,
        date=date,
        username=username,
        page=page,
        limit=limit,
    )
    return await list_notes(criteria, current_user_id=current_user_id, notes=notes, users=users)  # type: ignore
