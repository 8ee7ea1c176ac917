"""
Name: Invoice Router

Responsibilities:
  - Invoice CRUD with type/status/project filters
  - PATCH /invoices/{id}/status (Mark as Sent / Paid / Cancel)
  - Multipart attachments

Collaborators:
  - application.invoices.InvoiceService
  - identity.auth.require_capability (INVOICE_VIEW for reads, INVOICE_MANAGE for writes)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status

from .....application.invoices import InvoiceFilters, InvoiceInput, InvoiceService
from .....container import get_invoice_service
from .....crosscutting.pagination import paginate
from .....domain.entities import User
from .....domain.invoice_workflow import InvoiceStatus, InvoiceType
from .....domain.roles import Capability
from .....identity.auth import require_capability
from ..dependencies import PageParams, page_params, parse_enum, read_upload
from ..schemas.common import envelope, provided_fields
from ..schemas.finance import InvoiceReq, InvoiceRes, InvoiceStatusReq, UpdateInvoiceReq

router = APIRouter(prefix="/invoices", tags=["invoices"])

_can_view = require_capability(Capability.INVOICE_VIEW)
_can_manage = require_capability(Capability.INVOICE_MANAGE)


@router.get("")
def list_invoices(
    request: Request,
    type_filter: str | None = Query(None, alias="type"),
    status_filter: str | None = Query(None, alias="status"),
    project_id: str | None = Query(None, alias="projectId"),
    paging: PageParams = Depends(page_params),
    _actor: User = Depends(_can_view),
    service: InvoiceService = Depends(get_invoice_service),
):
    filters = InvoiceFilters(
        type=parse_enum(InvoiceType, type_filter, "type"),
        status=parse_enum(InvoiceStatus, status_filter, "status"),
        project_id=project_id,
    )
    page = paginate(service.list(filters), paging.page, paging.size)
    return envelope(
        request, [InvoiceRes.model_validate(i) for i in page.items], page.paging
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_invoice(
    request: Request,
    body: InvoiceReq,
    actor: User = Depends(_can_manage),
    service: InvoiceService = Depends(get_invoice_service),
):
    invoice = service.create(actor, InvoiceInput(**body.model_dump(by_alias=False)))
    return envelope(request, InvoiceRes.model_validate(invoice))


@router.get("/{invoice_id}")
def get_invoice(
    request: Request,
    invoice_id: str,
    _actor: User = Depends(_can_view),
    service: InvoiceService = Depends(get_invoice_service),
):
    return envelope(request, InvoiceRes.model_validate(service.get(invoice_id)))


@router.patch("/{invoice_id}")
def update_invoice(
    request: Request,
    invoice_id: str,
    body: UpdateInvoiceReq,
    _actor: User = Depends(_can_manage),
    service: InvoiceService = Depends(get_invoice_service),
):
    invoice = service.update(
        invoice_id, InvoiceInput(**body.model_dump(by_alias=False)), provided_fields(body)
    )
    return envelope(request, InvoiceRes.model_validate(invoice))


@router.delete("/{invoice_id}")
def delete_invoice(
    request: Request,
    invoice_id: str,
    _actor: User = Depends(_can_manage),
    service: InvoiceService = Depends(get_invoice_service),
):
    service.delete(invoice_id)
    return envelope(request, {"id": invoice_id, "deleted": True})


@router.patch("/{invoice_id}/status")
def change_invoice_status(
    request: Request,
    invoice_id: str,
    body: InvoiceStatusReq,
    actor: User = Depends(_can_manage),
    service: InvoiceService = Depends(get_invoice_service),
):
    invoice = service.change_status(actor, invoice_id, body.status)
    return envelope(request, InvoiceRes.model_validate(invoice))


@router.post("/{invoice_id}/attachments", status_code=status.HTTP_201_CREATED)
async def add_invoice_attachment(
    request: Request,
    invoice_id: str,
    file: UploadFile = File(...),
    actor: User = Depends(_can_manage),
    service: InvoiceService = Depends(get_invoice_service),
):
    upload = await read_upload(file)
    invoice = service.add_attachment(actor, invoice_id, upload)
    return envelope(request, InvoiceRes.model_validate(invoice))
