import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func

from notekeeper.models.user import User

logger = logging.getLogger(__name__)

async def check_db(session: AsyncSession) -> bool:
    """Database readiness check.

    Counts rows in ``users``, so a reachable database whose schema has not
    been migrated yet also reports as not ready.
    """
    try:
        await session.execute(select(func.count()).select_from(User))
        return True
    except SQLAlchemyError:
        logger.warning("database readiness probe failed", exc_info=True)
        return False
