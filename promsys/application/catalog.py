"""
Name: Settings Catalog Service

Responsibilities:
  - CRUD for vendors, taxes and categories
  - Keep references consistent (a category used by vendors/invoices cannot be
    deleted; a tax used by invoices can only be deactivated)

Collaborators:
  - domain.repositories: Vendor, Tax, Category, Invoice, Reimbursement stores
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from ..crosscutting.exceptions import ConflictError, NotFoundError, ValidationFailedError
from ..domain.entities import Category, CategoryType, Tax, Vendor, new_id
from ..domain.repositories import (
    CategoryRepository,
    InvoiceRepository,
    ReimbursementRepository,
    TaxRepository,
    VendorRepository,
)


@dataclass
class VendorInput:
    name: Optional[str] = None
    location: Optional[str] = None
    category_id: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


def _required(value: str | None, field: str, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationFailedError(f"{label} is required", field=field)
    return cleaned


def _check_percentage(value: Decimal | None) -> Decimal:
    if value is None:
        raise ValidationFailedError("Percentage is required", field="percentage")
    if value < 0 or value > 100:
        raise ValidationFailedError(
            "Percentage must be between 0 and 100", field="percentage"
        )
    return value


class CatalogService:
    def __init__(
        self,
        vendors: VendorRepository,
        taxes: TaxRepository,
        categories: CategoryRepository,
        invoices: InvoiceRepository,
        reimbursements: ReimbursementRepository,
    ):
        self.vendors = vendors
        self.taxes = taxes
        self.categories = categories
        self.invoices = invoices
        self.reimbursements = reimbursements

    # -- categories ---------------------------------------------------------

    def list_categories(self, type: CategoryType | None = None) -> List[Category]:
        items = self.categories.list(lambda c: type is None or c.type == type)
        return sorted(items, key=lambda c: c.name.lower())

    def require_category(self, category_id: str) -> Category:
        category = self.categories.get(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def create_category(self, name: str | None, type: CategoryType | None) -> Category:
        if type is None:
            raise ValidationFailedError("Category type is required", field="type")
        return self.categories.add(
            Category(id=new_id(), name=_required(name, "name", "Name"), type=type)
        )

    def update_category(
        self, category_id: str, name: str | None, type: CategoryType | None
    ) -> Category:
        category = self.require_category(category_id)
        if name is not None:
            category.name = _required(name, "name", "Name")
        if type is not None:
            category.type = type
        return self.categories.update(category)

    def delete_category(self, category_id: str) -> None:
        self.require_category(category_id)
        in_use = (
            self.vendors.list(lambda v: v.category_id == category_id)
            or self.invoices.list(lambda i: i.category_id == category_id)
            or self.reimbursements.list(lambda r: r.category_id == category_id)
        )
        if in_use:
            raise ConflictError("Category is in use")
        self.categories.delete(category_id)

    # -- taxes --------------------------------------------------------------

    def list_taxes(self) -> List[Tax]:
        return sorted(self.taxes.list(), key=lambda t: t.name.lower())

    def require_tax(self, tax_id: str) -> Tax:
        tax = self.taxes.get(tax_id)
        if tax is None:
            raise NotFoundError("Tax", tax_id)
        return tax

    def create_tax(
        self, name: str | None, percentage: Decimal | None, is_active: bool = True
    ) -> Tax:
        return self.taxes.add(
            Tax(
                id=new_id(),
                name=_required(name, "name", "Name"),
                percentage=_check_percentage(percentage),
                is_active=is_active,
            )
        )

    def update_tax(
        self,
        tax_id: str,
        *,
        name: str | None = None,
        percentage: Decimal | None = None,
        is_active: bool | None = None,
    ) -> Tax:
        tax = self.require_tax(tax_id)
        if name is not None:
            tax.name = _required(name, "name", "Name")
        if percentage is not None:
            tax.percentage = _check_percentage(percentage)
        if is_active is not None:
            tax.is_active = is_active
        return self.taxes.update(tax)

    def delete_tax(self, tax_id: str) -> None:
        self.require_tax(tax_id)
        if self.invoices.list(lambda i: i.tax_id == tax_id):
            raise ConflictError("Tax is used by invoices; deactivate it instead")
        self.taxes.delete(tax_id)

    # -- vendors ------------------------------------------------------------

    def list_vendors(self) -> List[Vendor]:
        return sorted(self.vendors.list(), key=lambda v: v.name.lower())

    def require_vendor(self, vendor_id: str) -> Vendor:
        vendor = self.vendors.get(vendor_id)
        if vendor is None:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    def create_vendor(self, data: VendorInput) -> Vendor:
        if data.category_id:
            self.require_category(data.category_id)
        return self.vendors.add(
            Vendor(
                id=new_id(),
                name=_required(data.name, "name", "Name"),
                location=_required(data.location, "location", "Location"),
                category_id=data.category_id,
                contact_person=data.contact_person,
                phone=data.phone,
                email=data.email,
            )
        )

    def update_vendor(self, vendor_id: str, data: VendorInput, provided: set[str]) -> Vendor:
        vendor = self.require_vendor(vendor_id)
        if "name" in provided:
            vendor.name = _required(data.name, "name", "Name")
        if "location" in provided:
            vendor.location = _required(data.location, "location", "Location")
        if "category_id" in provided:
            if data.category_id:
                self.require_category(data.category_id)
            vendor.category_id = data.category_id
        for name in ("contact_person", "phone", "email"):
            if name in provided:
                setattr(vendor, name, getattr(data, name))
        return self.vendors.update(vendor)

    def delete_vendor(self, vendor_id: str) -> None:
        self.require_vendor(vendor_id)
        if self.invoices.list(lambda i: i.vendor_id == vendor_id):
            raise ConflictError("Vendor is used by invoices")
        self.vendors.delete(vendor_id)
