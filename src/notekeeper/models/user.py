from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String
from notekeeper.db.session import Base


class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    # argon2 encoded hash; never the plain password
    password_hash: Mapped[str] = mapped_column("password", String(255))
