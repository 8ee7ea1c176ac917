"""
Name: User Administration Service

Responsibilities:
  - Mirror the auth provider's admin surface: list, create, set role,
    ban, unban, remove
  - Back the project member picker (search)

Collaborators:
  - domain.repositories.UserRepository
  - interfaces/api/http/routers/auth.py

Constraints:
  - Credentials never pass through here (the provider owns sign-in)
  - An admin cannot ban, demote or remove themself
"""

from __future__ import annotations

from typing import List

from ..crosscutting.exceptions import ConflictError, NotFoundError, ValidationFailedError
from ..crosscutting.logger import logger
from ..domain.entities import User, new_id, utcnow
from ..domain.repositories import UserRepository
from ..domain.roles import UserRole


class UserAdminService:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    def require(self, user_id: str) -> User:
        user = self.repository.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def list_users(self, *, limit: int = 100) -> List[User]:
        return self.repository.list()[:limit]

    def search(self, term: str | None) -> List[User]:
        return [u for u in self.repository.search(term) if not u.banned]

    def create_user(self, *, name: str, email: str, role: UserRole) -> User:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name:
            raise ValidationFailedError("Name is required", field="name")
        if "@" not in email:
            raise ValidationFailedError("A valid email is required", field="email")
        if self.repository.find_by_email(email) is not None:
            raise ConflictError(f"User with email '{email}' already exists")
        user = self.repository.add(User(id=new_id(), name=name, email=email, role=role))
        logger.info("user created", extra={"user_id": user.id, "role": role.value})
        return user

    def set_role(self, actor: User, user_id: str, role: UserRole) -> User:
        user = self.require(user_id)
        if user.id == actor.id and role != UserRole.ADMIN:
            raise ConflictError("Admins cannot demote themselves")
        user.role = role
        user.updated_at = utcnow()
        return self.repository.update(user)

    def ban(self, actor: User, user_id: str, reason: str | None) -> User:
        user = self.require(user_id)
        if user.id == actor.id:
            raise ConflictError("Admins cannot ban themselves")
        user.ban((reason or "").strip() or None)
        return self.repository.update(user)

    def unban(self, user_id: str) -> User:
        user = self.require(user_id)
        user.unban()
        return self.repository.update(user)

    def remove(self, actor: User, user_id: str) -> None:
        user = self.require(user_id)
        if user.id == actor.id:
            raise ConflictError("Admins cannot remove themselves")
        self.repository.delete(user.id)
        logger.info("user removed", extra={"user_id": user_id})
