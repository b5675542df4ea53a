from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from .base import ORMBase


class NoteWrite(BaseModel):
    # length limits are configurable and checked in the service layer
    title: str
    text: str


class NoteRead(ORMBase):
    id: int
    user_id: int
    title: str
    text: str
    created_at: datetime
    author: str


class NoteListItem(ORMBase):
    title: str
    text: str
    author: str
    # serialized only when True; routes exclude None
    belongs_to_current_user: Optional[bool] = Field(
        default=None, serialization_alias="belongsToCurrentUser"
    )
