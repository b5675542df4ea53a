import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.errors import DuplicateUsernameError
from notekeeper.repositories.user import SqlUserStore


@pytest.mark.asyncio
@pytest.mark.unit
async def test_user_create_and_lookup(db_session: AsyncSession):
    users = SqlUserStore(db_session)
    created = await users.create_user(username="unit_user", password_hash="hash")
    assert created.id is not None
    by_id = await users.get_by_id(created.id)
    assert by_id is not None and by_id.username == "unit_user"
    by_name = await users.get_by_username("unit_user")
    assert by_name is not None and by_name.id == created.id
    assert await users.get_by_username("nobody") is None
    assert await users.get_by_id(created.id + 1000) is None


@pytest.mark.asyncio
@pytest.mark.unit
async def test_duplicate_username(db_session: AsyncSession):
    users = SqlUserStore(db_session)
    await users.create_user(username="twice", password_hash="hash")
    await db_session.commit()
    with pytest.raises(DuplicateUsernameError):
        await users.create_user(username="twice", password_hash="other")
