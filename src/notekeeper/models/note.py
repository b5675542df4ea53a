from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, DateTime, ForeignKey
from notekeeper.db.session import Base


class Note(Base):
    """Short text note owned by one user.

    ``created_at`` is stamped by the service layer (not a server default) so
    the edit window is measured against the same clock the request used.
    ``author`` is a denormalized copy of the owner's username.
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, default="")
    text: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    author: Mapped[str] = mapped_column(String(20), default="")
