"""
Repository implementations exposed from a single import point.

Only in-memory stores ship today; they back the API service and the tests.
"""

from .in_memory import (
    InMemoryCategoryRepository,
    InMemoryInvoiceRepository,
    InMemoryNotificationRepository,
    InMemoryProjectActivityRepository,
    InMemoryProjectRepository,
    InMemoryReimbursementRepository,
    InMemoryTaskRepository,
    InMemoryTaxRepository,
    InMemoryTeamRepository,
    InMemoryUserRepository,
    InMemoryVendorRepository,
)

__all__ = [
    "InMemoryCategoryRepository",
    "InMemoryInvoiceRepository",
    "InMemoryNotificationRepository",
    "InMemoryProjectActivityRepository",
    "InMemoryProjectRepository",
    "InMemoryReimbursementRepository",
    "InMemoryTaskRepository",
    "InMemoryTaxRepository",
    "InMemoryTeamRepository",
    "InMemoryUserRepository",
    "InMemoryVendorRepository",
]
