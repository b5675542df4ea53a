from datetime import datetime
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.api import deps
from notekeeper.core.auth import TOKEN_COOKIE
from notekeeper.core.config import Settings
from notekeeper.core.tokens import TokenService
from notekeeper.repositories.user import SqlUserStore
from notekeeper.schemas.base import MessageResponse
from notekeeper.schemas.user import Credentials, TokenResponse
from notekeeper.services.user import signup, signin

router = APIRouter(tags=["auth"])


@router.post(
    "/signup",
    response_model=MessageResponse,
    summary="Register a user",
    description="Username: 4-20 of [A-Za-z0-9_]. Password: 6-20 of [A-Za-z0-9_!?@#$%^&*()+=].",
)
async def signup_route(
    payload: Credentials,
    session: AsyncSession = Depends(deps.get_db),
    users: SqlUserStore = Depends(deps.get_user_store),
):
    await signup(users, username=payload.username, password=payload.password)
    await session.commit()
    return MessageResponse(message="User registered successfully")


@router.post("/signin", response_model=TokenResponse, summary="Sign in and receive a session token")
async def signin_route(
    payload: Credentials,
    response: Response,
    users: SqlUserStore = Depends(deps.get_user_store),
    tokens: TokenService = Depends(deps.get_token_service),
    settings: Settings = Depends(deps.get_settings),
    now: datetime = Depends(deps.get_now),
):
    token = await signin(users, tokens, username=payload.username, password=payload.password, now=now)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=int(tokens.ttl.total_seconds()),
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return TokenResponse(token=token)
