from __future__ import annotations

from functools import wraps
from typing import Iterable, Optional

from flask import g, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import Identity
from .service import AuthService

ANY_ROLE = frozenset(Role)
ADMIN_ONLY = frozenset({Role.ADMIN})
STAFF_EDITORS = frozenset({Role.ADMIN, Role.STAFF})


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def current_identity() -> Identity:
    identity = g.get("identity")
    if identity is None:
        raise AuthenticationError("Not authorized, no token")
    return identity


def ensure_role(identity: Identity, allowed: Iterable[Role]) -> None:
    if identity.role not in frozenset(allowed):
        raise AuthorizationError(f"User role '{identity.user_role.value}' is not authorized to access this route")


class RouteGuards:
    """View decorators resolving the bearer token into ``flask.g.identity``."""

    def __init__(self, auth_service: AuthService):
        self._auth = auth_service

    def _authenticate(self) -> Identity:
        token = bearer_token()
        if not token:
            raise AuthenticationError("Not authorized, no token")
        identity = self._auth.resolve(token)
        g.identity = identity
        return identity

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            self._authenticate()
            return view(*args, **kwargs)

        return wrapper

    def roles_required(self, allowed: frozenset):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                ensure_role(self._authenticate(), allowed)
                return view(*args, **kwargs)

            return wrapper

        return decorator

    def optional_auth(self, view):
        """Resolve the caller when a token is sent; anonymous otherwise."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            g.identity = None
            if bearer_token():
                self._authenticate()
            return view(*args, **kwargs)

        return wrapper
