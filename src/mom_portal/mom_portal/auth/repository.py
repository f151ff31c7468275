from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import UserRole
from .model import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole,
        mobile_no: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        raise NotImplementedError

    def set_password_hash(self, user_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def touch_last_login(self, user_id: int, at: datetime) -> None:
        raise NotImplementedError
