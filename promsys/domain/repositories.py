"""
Name: Domain Repository Interfaces (Protocols)

Responsibilities:
  - Define persistence contracts for the domain layer (ports)
  - Keep application services independent from the storage backend

Collaborators:
  - domain/entities.py
  - infrastructure/repositories/in_memory: the shipped implementations

Constraints:
  - Pure interfaces: no side effects, no infrastructure imports
  - Outputs are concrete lists for predictable iteration/serialization

Notes:
  - typing.Protocol gives structural subtyping; tests can pass plain fakes
"""

from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional, Protocol, TypeVar

from .entities import (
    Category,
    Invoice,
    Notification,
    Project,
    ProjectActivity,
    Reimbursement,
    StoredFile,
    Task,
    Tax,
    Team,
    User,
    Vendor,
)

T = TypeVar("T")


class Repository(Protocol[T]):
    """R: Minimal CRUD shared by every aggregate store."""

    def get(self, entity_id: str) -> Optional[T]:
        ...

    def add(self, entity: T) -> T:
        ...

    def update(self, entity: T) -> T:
        ...

    def delete(self, entity_id: str) -> bool:
        ...

    def list(self, predicate: Callable[[T], bool] | None = None) -> List[T]:
        ...


class UserRepository(Repository[User], Protocol):
    def find_by_email(self, email: str) -> Optional[User]:
        ...

    def search(self, term: str | None) -> List[User]:
        ...


class ProjectRepository(Repository[Project], Protocol):
    ...


class ProjectActivityRepository(Repository[ProjectActivity], Protocol):
    def list_for_project(self, project_id: str) -> List[ProjectActivity]:
        ...

    def delete_for_project(self, project_id: str) -> int:
        ...


class TaskRepository(Repository[Task], Protocol):
    def list_for_project(self, project_id: str) -> List[Task]:
        ...


class InvoiceRepository(Repository[Invoice], Protocol):
    def add_numbered(self, invoice: Invoice, day: date) -> Invoice:
        """R: numbers the invoice with the next daily sequence and stores it in one step."""
        ...


class ReimbursementRepository(Repository[Reimbursement], Protocol):
    ...


class VendorRepository(Repository[Vendor], Protocol):
    ...


class TaxRepository(Repository[Tax], Protocol):
    ...


class CategoryRepository(Repository[Category], Protocol):
    ...


class TeamRepository(Repository[Team], Protocol):
    ...


class NotificationRepository(Repository[Notification], Protocol):
    def list_for_user(self, user_id: str) -> List[Notification]:
        ...

    def mark_all_read(self, user_id: str) -> int:
        ...


class FileStorage(Protocol):
    """R: Uploaded file bytes + metadata."""

    def save(
        self,
        *,
        original_name: str,
        content_type: str,
        data: bytes,
        uploaded_by_id: str,
    ) -> StoredFile:
        ...

    def get(self, file_id: str) -> Optional[StoredFile]:
        ...

    def read(self, file_id: str) -> Optional[bytes]:
        ...
