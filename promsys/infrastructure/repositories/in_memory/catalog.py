"""In-memory stores for the settings catalogs and teams."""

from __future__ import annotations

from ....domain.entities import Category, Tax, Team, Vendor
from .base import InMemoryRepository


class InMemoryVendorRepository(InMemoryRepository[Vendor]):
    pass


class InMemoryTaxRepository(InMemoryRepository[Tax]):
    pass


class InMemoryCategoryRepository(InMemoryRepository[Category]):
    pass


class InMemoryTeamRepository(InMemoryRepository[Team]):
    pass
