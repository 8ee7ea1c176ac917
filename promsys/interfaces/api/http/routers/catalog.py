"""
Name: Settings Catalog Router

Responsibilities:
  - /vendors (paginated), /taxes and /categories?type= CRUD
  - Reads are open to any signed-in user (invoice and reimbursement forms
    need the option lists); writes need SETTINGS_MANAGE, categories
    CATEGORY_MANAGE

Collaborators:
  - application.catalog.CatalogService
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, status

from .....application.catalog import CatalogService, VendorInput
from .....container import get_catalog_service
from .....crosscutting.pagination import paginate
from .....domain.entities import CategoryType, User
from .....domain.roles import Capability
from .....identity.auth import require_capability, require_user
from ..dependencies import PageParams, page_params, parse_enum
from ..schemas.catalog import (
    CategoryReq,
    CategoryRes,
    TaxReq,
    TaxRes,
    UpdateCategoryReq,
    UpdateTaxReq,
    UpdateVendorReq,
    VendorReq,
    VendorRes,
)
from ..schemas.common import envelope, provided_fields

router = APIRouter(tags=["settings"])

_settings_admin = require_capability(Capability.SETTINGS_MANAGE)
_category_admin = require_capability(Capability.CATEGORY_MANAGE)


# -----------------------------------------------------------------------------
# Vendors
# -----------------------------------------------------------------------------
@router.get("/vendors")
def list_vendors(
    request: Request,
    search: str | None = Query(None),
    paging: PageParams = Depends(page_params),
    _actor: User = Depends(require_user()),
    service: CatalogService = Depends(get_catalog_service),
):
    term = (search or "").strip().lower()
    vendors = [v for v in service.list_vendors() if not term or term in v.name.lower()]
    page = paginate(vendors, paging.page, paging.size)
    return envelope(request, [VendorRes.model_validate(v) for v in page.items], page.paging)


@router.post("/vendors", status_code=status.HTTP_201_CREATED)
def create_vendor(
    request: Request,
    body: VendorReq,
    _actor: User = Depends(_settings_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    vendor = service.create_vendor(VendorInput(**body.model_dump(by_alias=False)))
    return envelope(request, VendorRes.model_validate(vendor))


@router.get("/vendors/{vendor_id}")
def get_vendor(
    request: Request,
    vendor_id: str,
    _actor: User = Depends(require_user()),
    service: CatalogService = Depends(get_catalog_service),
):
    return envelope(request, VendorRes.model_validate(service.require_vendor(vendor_id)))


@router.patch("/vendors/{vendor_id}")
def update_vendor(
    request: Request,
    vendor_id: str,
    body: UpdateVendorReq,
    _actor: User = Depends(_settings_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    vendor = service.update_vendor(
        vendor_id, VendorInput(**body.model_dump(by_alias=False)), provided_fields(body)
    )
    return envelope(request, VendorRes.model_validate(vendor))


@router.delete("/vendors/{vendor_id}")
def delete_vendor(
    request: Request,
    vendor_id: str,
    _actor: User = Depends(_settings_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    service.delete_vendor(vendor_id)
    return envelope(request, {"id": vendor_id, "deleted": True})


# -----------------------------------------------------------------------------
# Taxes
# -----------------------------------------------------------------------------
@router.get("/taxes")
def list_taxes(
    request: Request,
    active: bool | None = Query(None),
    _actor: User = Depends(require_user()),
    service: CatalogService = Depends(get_catalog_service),
):
    taxes = [t for t in service.list_taxes() if active is None or t.is_active == active]
    return envelope(request, [TaxRes.model_validate(t) for t in taxes])


@router.post("/taxes", status_code=status.HTTP_201_CREATED)
def create_tax(
    request: Request,
    body: TaxReq,
    _actor: User = Depends(_settings_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    tax = service.create_tax(body.name, body.percentage, body.is_active)
    return envelope(request, TaxRes.model_validate(tax))


@router.patch("/taxes/{tax_id}")
def update_tax(
    request: Request,
    tax_id: str,
    body: UpdateTaxReq,
    _actor: User = Depends(_settings_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    tax = service.update_tax(
        tax_id, name=body.name, percentage=body.percentage, is_active=body.is_active
    )
    return envelope(request, TaxRes.model_validate(tax))


@router.delete("/taxes/{tax_id}")
def delete_tax(
    request: Request,
    tax_id: str,
    _actor: User = Depends(_settings_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    service.delete_tax(tax_id)
    return envelope(request, {"id": tax_id, "deleted": True})


# -----------------------------------------------------------------------------
# Categories
# -----------------------------------------------------------------------------
@router.get("/categories")
def list_categories(
    request: Request,
    type_filter: str | None = Query(None, alias="type"),
    _actor: User = Depends(require_user()),
    service: CatalogService = Depends(get_catalog_service),
):
    wanted = parse_enum(CategoryType, type_filter, "type")
    return envelope(
        request, [CategoryRes.model_validate(c) for c in service.list_categories(wanted)]
    )


@router.post("/categories", status_code=status.HTTP_201_CREATED)
def create_category(
    request: Request,
    body: CategoryReq,
    _actor: User = Depends(_category_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    category = service.create_category(body.name, body.type)
    return envelope(request, CategoryRes.model_validate(category))


@router.patch("/categories/{category_id}")
def update_category(
    request: Request,
    category_id: str,
    body: UpdateCategoryReq,
    _actor: User = Depends(_category_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    category = service.update_category(category_id, body.name, body.type)
    return envelope(request, CategoryRes.model_validate(category))


@router.delete("/categories/{category_id}")
def delete_category(
    request: Request,
    category_id: str,
    _actor: User = Depends(_category_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    service.delete_category(category_id)
    return envelope(request, {"id": category_id, "deleted": True})
