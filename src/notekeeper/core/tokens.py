"""Session token issuing and verification.

Tokens are HS256 JWTs carrying:

* ``user_id``: the authenticated user's id (integer)
* ``iat`` / ``exp``: issue time and expiry (``iat`` + ``token_ttl_hours``)
* ``iss``: the configured issuer string

Verification is stateless: a token is valid iff the signature verifies with
the configured key, ``iss`` equals the configured issuer exactly and the
current time is before ``exp``. There is no revocation list.

The clock is passed in (``now``) rather than read inside jose so request
handlers and tests share one notion of "now".
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt, JWTError

from notekeeper.core.config import Settings
from notekeeper.core.errors import InvalidTokenError

USER_ID_CLAIM = "user_id"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    def __init__(self, settings: Settings) -> None:
        self._key = settings.jwt_secret.get_secret_value()
        self._algorithm = settings.jwt_algorithm
        self._issuer = settings.jwt_issuer
        self._ttl = timedelta(hours=settings.token_ttl_hours)

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        now = now or _utcnow()
        claims = {
            USER_ID_CLAIM: user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
            "iss": self._issuer,
        }
        return jwt.encode(claims, self._key, algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> int:
        """Return the user id embedded in ``token`` or raise ``InvalidTokenError``."""
        now = now or _utcnow()
        if not token or token.count(".") != 2:
            raise InvalidTokenError("Malformed token")
        try:
            # expiry is checked below against the injected clock
            claims: dict[str, Any] = jwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"verify_exp": False, "verify_aud": False},
            )
        except JWTError as e:
            raise InvalidTokenError("Token verification failed") from e
        if claims.get("iss") != self._issuer:
            raise InvalidTokenError("Invalid issuer")
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)) or now.timestamp() >= exp:
            raise InvalidTokenError("Token expired")
        user_id = claims.get(USER_ID_CLAIM)
        # bool is an int subclass; reject it explicitly
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidTokenError("Missing user id claim")
        return user_id


__all__ = ["TokenService", "USER_ID_CLAIM"]
