from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Permission, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..core.permissions import permissions_for
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login.

    The permission set is resolved from the role once, at login, and never
    changes for the lifetime of the session.
    """

    user_id: int
    full_name: str
    username: str
    role: Role
    permissions: frozenset[Permission] = field(default_factory=frozenset)

    def can(self, permission: Permission) -> bool:
        return permission in self.permissions

    def require(self, permission: Permission) -> None:
        if not self.can(permission):
            raise AuthorizationError("You do not have permission to perform this action")

    def to_session(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "username": self.username,
            "role": self.role.value,
            "permissions": sorted(p.value for p in self.permissions),
        }

    @classmethod
    def from_session(cls, data: dict[str, Any]) -> "SessionUser":
        return cls(
            user_id=int(data["user_id"]),
            full_name=data["full_name"],
            username=data["username"],
            role=Role(data["role"]),
            permissions=frozenset(Permission(p) for p in data.get("permissions", [])),
        )

    @classmethod
    def for_user(cls, user: User) -> "SessionUser":
        return cls(
            user_id=user.user_id,
            full_name=user.full_name,
            username=user.username,
            role=user.role,
            permissions=permissions_for(user.role),
        )


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")
        return SessionUser.for_user(user)


class UserService:
    """Use case: manage login accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(self, *, full_name: str, username: str, password: str, role: Role) -> int:
        full_name = require_non_empty(full_name, "Full name")
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", 6)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        return self._users.create_user(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
        )

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def change_password(self, *, user_id: int, current_password: str, new_password: str) -> None:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if not check_password_hash(user.password_hash, current_password or ""):
            raise ValidationError("Current password is incorrect")
        require_min_length(new_password, "New password", 6)
        self._users.update_password(user_id, generate_password_hash(new_password))

    def assign_role(self, *, acting_user_id: int, user_id: int, role: Role) -> None:
        if int(acting_user_id) == int(user_id):
            raise ValidationError("You cannot change your own role")
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")
        self._users.update_role(user_id, role)

    def delete_user(self, *, acting_user_id: int, user_id: int) -> None:
        if int(acting_user_id) == int(user_id):
            raise ValidationError("You cannot delete your own account")
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.role == Role.ADMIN and sum(1 for u in self._users.list_all() if u.role == Role.ADMIN) <= 1:
            raise ValidationError("The last admin account cannot be deleted")
        if not self._users.delete_by_id(user_id):
            raise ValidationError("Deleting the user failed")
