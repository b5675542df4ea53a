"""User service layer.

Signup validation and signin credential checks. Users are immutable once
created; there is no update or delete path.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime

from notekeeper.core.errors import DuplicateUsernameError, InvalidCredentialsError, ValidationError
from notekeeper.core.security import hash_password, verify_password
from notekeeper.core.tokens import TokenService
from notekeeper.models.user import User
from notekeeper.repositories.base import UserStore

__all__ = [
    "validate_credentials",
    "signup",
    "signin",
]

logger = logging.getLogger(__name__)

USERNAME_MIN, USERNAME_MAX = 4, 20
PASSWORD_MIN, PASSWORD_MAX = 6, 20
_USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
_PASSWORD_RE = re.compile(r"^[A-Za-z0-9_!?@#$%^&*()+=]+$")


def validate_credentials(username: str, password: str) -> None:
    if not USERNAME_MIN <= len(username) <= USERNAME_MAX:
        raise ValidationError(f"Username must be {USERNAME_MIN} to {USERNAME_MAX} characters long")
    if not _USERNAME_RE.match(username):
        raise ValidationError("Username may only contain Latin letters, digits and underscores")
    if not PASSWORD_MIN <= len(password) <= PASSWORD_MAX:
        raise ValidationError(f"Password must be {PASSWORD_MIN} to {PASSWORD_MAX} characters long")
    if not _PASSWORD_RE.match(password):
        raise ValidationError(
            "Password may only contain Latin letters, digits and the symbols _!?@#$%^&*()+="
        )


async def signup(users: UserStore, *, username: str, password: str) -> User:
    validate_credentials(username, password)
    if await users.get_by_username(username) is not None:
        raise DuplicateUsernameError()
    # a concurrent signup can still lose the race; the store maps that to the same error
    user = await users.create_user(username=username, password_hash=hash_password(password))
    logger.info("user created", extra={"user_id": user.id})
    return user


async def signin(
    users: UserStore,
    tokens: TokenService,
    *,
    username: str,
    password: str,
    now: datetime | None = None,
) -> str:
    user = await users.get_by_username(username)
    if user is None or not verify_password(user.password_hash, password):
        logger.info("signin refused", extra={"username": username})
        raise InvalidCredentialsError()
    return tokens.issue(user.id, now)
