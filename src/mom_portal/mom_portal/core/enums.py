from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Canonical roles used for authorization."""

    ADMIN = "Admin"
    CONVENER = "Convener"
    STAFF = "Staff"


class UserRole(str, Enum):
    """Roles stored on login accounts, including legacy lowercase values."""

    ADMIN = "Admin"
    CONVENER = "Convener"
    STAFF = "Staff"
    LEGACY_ADMIN = "admin"
    LEGACY_STAFF = "staff"
    LEGACY_USER = "user"

    def as_role(self) -> Optional[Role]:
        """Resolve to the canonical role; plain 'user' accounts have none."""
        return _USER_ROLE_MAP.get(self)


_USER_ROLE_MAP = {
    UserRole.ADMIN: Role.ADMIN,
    UserRole.CONVENER: Role.CONVENER,
    UserRole.STAFF: Role.STAFF,
    UserRole.LEGACY_ADMIN: Role.ADMIN,
    UserRole.LEGACY_STAFF: Role.STAFF,
}


class MeetingStatus(str, Enum):
    """Meeting lifecycle states stored in the database."""

    SCHEDULED = "Scheduled"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
