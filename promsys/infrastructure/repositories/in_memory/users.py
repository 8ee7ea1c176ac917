"""In-memory user store (mirrors the auth provider's user table)."""

from __future__ import annotations

from typing import List, Optional

from ....domain.entities import User
from .base import InMemoryRepository


class InMemoryUserRepository(InMemoryRepository[User]):
    def find_by_email(self, email: str) -> Optional[User]:
        needle = email.strip().lower()
        with self._lock:
            for user in self._items.values():
                if user.email.lower() == needle:
                    return user
        return None

    def search(self, term: str | None) -> List[User]:
        needle = (term or "").strip().lower()
        if not needle:
            return sorted(self.list(), key=lambda u: u.name.lower())
        return sorted(
            self.list(
                lambda u: needle in u.name.lower() or needle in u.email.lower()
            ),
            key=lambda u: u.name.lower(),
        )
