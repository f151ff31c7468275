from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import fmt_datetime
from ..core.enums import Role, UserRole


@dataclass(frozen=True)
class User:
    """Login account.

    Note: plain data object, no database access here.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.LEGACY_USER
    mobile_no: Optional[str] = None
    is_active: bool = True
    last_login: Optional[datetime] = None
    created: Optional[datetime] = None
    modified: Optional[datetime] = None

    def to_dict(self) -> dict:
        first, _, last = self.name.partition(" ")
        return {
            "id": self.user_id,
            "name": self.name,
            "firstName": first,
            "lastName": last,
            "email": self.email,
            "mobileNo": self.mobile_no,
            "role": self.role.value,
            "isActive": self.is_active,
            "lastLogin": fmt_datetime(self.last_login),
            "created": fmt_datetime(self.created),
            "modified": fmt_datetime(self.modified),
        }


@dataclass(frozen=True)
class Identity:
    """Caller resolved from a bearer token."""

    user_id: int
    name: str
    user_role: UserRole

    @property
    def role(self) -> Optional[Role]:
        return self.user_role.as_role()

    def to_dict(self) -> dict:
        return {"id": self.user_id, "name": self.name, "role": self.user_role.value}
