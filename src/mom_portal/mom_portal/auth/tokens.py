from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..core.enums import UserRole
from ..core.exceptions import AuthenticationError
from .model import Identity, User

ALGORITHM = "HS256"


class TokenIssuer:
    """Signs and verifies HS256 bearer tokens carrying {id, role, name}."""

    def __init__(
        self,
        *,
        secret: str,
        expires_hours: int,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._lifetime = timedelta(hours=expires_hours)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(self, user: User) -> str:
        now = self._clock()
        payload = {
            "id": user.user_id,
            "role": user.role.value,
            "name": user.name,
            "iat": now,
            "exp": now + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> Identity:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
            return Identity(
                user_id=int(claims["id"]),
                name=str(claims.get("name", "")),
                user_role=UserRole(claims["role"]),
            )
        except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
            raise AuthenticationError("Not authorized, token failed") from e
