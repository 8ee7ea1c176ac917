"""
Name: Settings Catalog Queries (vendors, taxes, categories)

Keys:
  - ("vendors", page, size), ("vendors", id)
  - ("taxes",)
  - ("categories", type)

Tax and category writes invalidate their whole prefix (non-exact) so every
filtered variant refreshes.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from ...domain.entities import CategoryType
from ..api import ApiResponse
from .base import Resource, camel_payload

VENDORS = ("vendors",)
TAXES = ("taxes",)
CATEGORIES = ("categories",)


def vendors_key(page: int = 1, size: int = 10) -> tuple:
    return ("vendors", page, size)


def vendor_key(vendor_id: str) -> tuple:
    return ("vendors", vendor_id)


def categories_key(type: CategoryType | None = None) -> tuple:
    return ("categories", type)


class VendorResource(Resource):
    def list(self, page: int = 1, size: int = 10) -> ApiResponse:
        return self._query(
            vendors_key(page, size),
            lambda: self.api.get_page("/vendors", params={"page": page, "size": size}),
        )

    def get(self, vendor_id: str) -> dict[str, Any]:
        return self._query(vendor_key(vendor_id), lambda: self.api.get(f"/vendors/{vendor_id}"))

    def create(
        self,
        *,
        name: str,
        location: str,
        category_id: str | None = None,
        contact_person: str | None = None,
        phone: str | None = None,
        email: str | None = None,
    ) -> dict[str, Any]:
        body = camel_payload(
            {
                "name": name,
                "location": location,
                "category_id": category_id,
                "contact_person": contact_person,
                "phone": phone,
                "email": email,
            },
            drop_none=True,
        )
        return self._mutate(lambda: self.api.post("/vendors", body), [VENDORS])

    def update(self, vendor_id: str, **changes: Any) -> dict[str, Any]:
        body = camel_payload(changes)
        return self._mutate(lambda: self.api.patch(f"/vendors/{vendor_id}", body), [VENDORS])

    def delete(self, vendor_id: str) -> Any:
        return self._mutate(lambda: self.api.delete(f"/vendors/{vendor_id}"), [VENDORS])


class TaxResource(Resource):
    def list(self) -> list[dict[str, Any]]:
        return self._query(TAXES, lambda: self.api.get("/taxes"))

    def create(self, *, name: str, percentage: Decimal, is_active: bool = True) -> dict[str, Any]:
        body = camel_payload({"name": name, "percentage": percentage, "is_active": is_active})
        return self._mutate(lambda: self.api.post("/taxes", body), [TAXES])

    def update(self, tax_id: str, **changes: Any) -> dict[str, Any]:
        body = camel_payload(changes)
        return self._mutate(lambda: self.api.patch(f"/taxes/{tax_id}", body), [TAXES])

    def delete(self, tax_id: str) -> Any:
        return self._mutate(lambda: self.api.delete(f"/taxes/{tax_id}"), [TAXES])


class CategoryResource(Resource):
    def list(self, type: CategoryType | None = None) -> list[dict[str, Any]]:
        params = {"type": type.value} if type else None
        return self._query(
            categories_key(type), lambda: self.api.get("/categories", params=params)
        )

    def create(self, *, name: str, type: CategoryType) -> dict[str, Any]:
        body = camel_payload({"name": name, "type": type})
        return self._mutate(lambda: self.api.post("/categories", body), [CATEGORIES])

    def update(self, category_id: str, **changes: Any) -> dict[str, Any]:
        body = camel_payload(changes)
        return self._mutate(
            lambda: self.api.patch(f"/categories/{category_id}", body), [CATEGORIES]
        )

    def delete(self, category_id: str) -> Any:
        return self._mutate(lambda: self.api.delete(f"/categories/{category_id}"), [CATEGORIES])
