from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..app_logger import get_logger
from ..common.datetime_utils import now_local
from ..common.validators import (
    optional_phone,
    require_email,
    require_min_length,
    required_text,
)
from ..core.constants import EMAIL_MAX, MIN_PASSWORD_LENGTH, USER_MOBILE_MAX, USER_NAME_MAX
from ..core.enums import Role, UserRole
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import Identity, User
from .repository import UserRepository
from .tokens import TokenIssuer

log = get_logger("auth")

# Accounts with these roles can only be created by an Admin
PRIVILEGED_ROLES = frozenset({UserRole.ADMIN, UserRole.CONVENER, UserRole.LEGACY_ADMIN})


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: User

    def to_dict(self) -> dict:
        return {"token": self.token, "user": self.user.to_dict()}


def _parse_user_role(value: Any) -> UserRole:
    try:
        return UserRole(value)
    except ValueError:
        raise ValidationError("Invalid role")


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # placeholder or corrupted hashes
        return False


class AuthService:
    """Use cases: register, login, token resolution and profile maintenance."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenIssuer,
        *,
        clock: Optional[Callable[[], Any]] = None,
    ):
        self._users = users
        self._tokens = tokens
        self._clock = clock or now_local

    def register(self, data: Mapping[str, Any], *, caller: Optional[Identity] = None) -> AuthResult:
        first = required_text(data.get("firstName"), "First name", USER_NAME_MAX)
        last = required_text(data.get("lastName"), "Last name", USER_NAME_MAX)
        name = f"{first} {last}"
        if len(name) > USER_NAME_MAX:
            raise ValidationError(f"Name cannot exceed {USER_NAME_MAX} characters")
        email = require_email(data.get("email"), "Email", EMAIL_MAX)
        password = data.get("password")
        if not isinstance(password, str):
            raise ValidationError("Password is required")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        role = _parse_user_role(data.get("role") or UserRole.LEGACY_USER.value)
        mobile_no = optional_phone(data.get("mobileNo"), "Mobile number", USER_MOBILE_MAX)

        if role in PRIVILEGED_ROLES and (caller is None or caller.role != Role.ADMIN):
            raise AuthorizationError(f"Only an Admin can create {role.value} accounts")

        if self._users.get_by_email(email):
            raise ConflictError("User with this email already exists")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            mobile_no=mobile_no,
        )
        user = self._require_user(user_id)
        log.info("User %s registered with role %s", user_id, role.value)
        return AuthResult(token=self._tokens.issue(user), user=user)

    def login(self, *, email: Any, password: Any, role: Any) -> AuthResult:
        if not email or not password or not role:
            raise ValidationError("Please provide email, password and role")

        user = self._users.get_by_email(str(email).strip().lower())
        if not user or not _password_matches(user.password_hash, str(password)):
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthorizationError("Account is deactivated")
        if user.role.value != role:
            raise AuthorizationError("Role is incorrect for this account")

        self._users.touch_last_login(user.user_id, self._clock())
        user = self._require_user(user.user_id)
        log.info("User %s logged in", user.user_id)
        return AuthResult(token=self._tokens.issue(user), user=user)

    def resolve(self, token: str) -> Identity:
        """Bearer token -> identity, re-read from the store so role changes apply."""
        claims = self._tokens.decode(token)
        user = self._users.get_by_id(claims.user_id)
        if not user:
            raise AuthenticationError("User not found")
        if not user.is_active:
            raise AuthorizationError("Account is deactivated")
        return Identity(user_id=user.user_id, name=user.name, user_role=user.role)

    def _require_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_profile(self, user_id: int) -> User:
        return self._require_user(user_id)

    def update_profile(self, user_id: int, data: Mapping[str, Any]) -> User:
        user = self._require_user(user_id)
        name = user.name
        email = user.email
        if "name" in data:
            name = required_text(data["name"], "Name", USER_NAME_MAX)
        if "email" in data:
            email = require_email(data["email"], "Email", EMAIL_MAX)
            other = self._users.get_by_email(email)
            if other and other.user_id != user.user_id:
                raise ConflictError("Email already in use")
        self._users.update_profile(user.user_id, name=name, email=email)
        return self._require_user(user.user_id)

    def change_password(self, user_id: int, *, current_password: Any, new_password: Any) -> None:
        if not current_password or not new_password:
            raise ValidationError("Please provide current and new password")
        user = self._require_user(user_id)
        if not _password_matches(user.password_hash, str(current_password)):
            raise AuthenticationError("Current password is incorrect")
        require_min_length(str(new_password), "New password", MIN_PASSWORD_LENGTH)
        self._users.set_password_hash(user.user_id, generate_password_hash(str(new_password)))
        log.info("User %s changed password", user.user_id)
