import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import select
from notekeeper.core.errors import DuplicateUsernameError, StoreError
from notekeeper.models.user import User

logger = logging.getLogger(__name__)


class SqlUserStore:
    """``UserStore`` backed by an ``AsyncSession`` (flushes, never commits)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_user(self, *, username: str, password_hash: str) -> User:
        user = User(username=username, password_hash=password_hash)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateUsernameError() from e
        except SQLAlchemyError as e:
            logger.exception("user insert failed", extra={"username": username})
            raise StoreError() from e
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self._one(select(User).where(User.id == user_id))

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self._one(select(User).where(User.username == username))

    async def _one(self, stmt) -> Optional[User]:
        try:
            res = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.exception("user lookup failed")
            raise StoreError() from e
        return res.scalar_one_or_none()
