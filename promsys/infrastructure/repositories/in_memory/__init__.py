"""
In-Memory Repository Implementations.

For testing and local development. Data is lost on process restart.
"""

from .catalog import (
    InMemoryCategoryRepository,
    InMemoryTaxRepository,
    InMemoryTeamRepository,
    InMemoryVendorRepository,
)
from .finance import InMemoryInvoiceRepository, InMemoryReimbursementRepository
from .notifications import InMemoryNotificationRepository
from .projects import InMemoryProjectActivityRepository, InMemoryProjectRepository
from .tasks import InMemoryTaskRepository
from .users import InMemoryUserRepository

__all__ = [
    # Identity
    "InMemoryUserRepository",
    # Projects / tasks
    "InMemoryProjectRepository",
    "InMemoryProjectActivityRepository",
    "InMemoryTaskRepository",
    # Finance
    "InMemoryInvoiceRepository",
    "InMemoryReimbursementRepository",
    # Catalogs
    "InMemoryVendorRepository",
    "InMemoryTaxRepository",
    "InMemoryCategoryRepository",
    "InMemoryTeamRepository",
    # Inbox
    "InMemoryNotificationRepository",
]
