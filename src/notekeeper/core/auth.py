"""Session authentication dependencies.

``get_current_user_id`` resolves the requesting user from the ``token``
cookie set by ``/signin``. An ``Authorization: Bearer <token>`` header is
accepted when the cookie is absent (API clients without a cookie jar).

The request clock (``get_now``) is a dependency too, so tests can move time
with ``app.dependency_overrides[deps.get_now]``.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from fastapi import Cookie, Depends, Header

from notekeeper.core.config import Settings, get_settings
from notekeeper.core.errors import UnauthorizedError
from notekeeper.core.tokens import TokenService

TOKEN_COOKIE = "token"


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings)


def _extract_token(cookie: Optional[str], authorization: Optional[str]) -> str:
    if cookie:
        return cookie
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip()
    raise UnauthorizedError()


async def get_current_user_id(
    token: Optional[str] = Cookie(None, alias=TOKEN_COOKIE),
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
    now: datetime = Depends(get_now),
) -> int:
    """Verify the session token and return the user id it carries.

    Raises ``UnauthorizedError`` (401) when no token is presented and
    ``InvalidTokenError`` (401) when it fails verification.
    """
    return tokens.verify(_extract_token(token, authorization), now)


__all__ = ["TOKEN_COOKIE", "get_now", "get_token_service", "get_current_user_id"]
