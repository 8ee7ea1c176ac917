"""
Name: Reimbursement Router

Responsibilities:
  - Submit and list reimbursements (processors see all, others their own)
  - PATCH approve / reject / pay; the use case answers 403 for
    non-processors and 409 for off-graph actions
  - Multipart attachments with a `type` form field (RECEIPT | PAYMENT)

Collaborators:
  - application.reimbursements.ReimbursementService
  - identity.auth.require_user
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status

from .....application.reimbursements import ReimbursementInput, ReimbursementService
from .....container import get_reimbursement_service
from .....crosscutting.pagination import paginate
from .....domain.entities import User
from .....domain.reimbursement_workflow import (
    AttachmentType,
    ReimbursementAction,
    ReimbursementStatus,
)
from .....identity.auth import require_user
from ..dependencies import PageParams, page_params, parse_enum, read_upload
from ..schemas.common import envelope
from ..schemas.finance import RejectReq, ReimbursementReq, ReimbursementRes

router = APIRouter(prefix="/reimbursements", tags=["reimbursements"])


@router.get("")
def list_reimbursements(
    request: Request,
    status_filter: str | None = Query(None, alias="status"),
    project_id: str | None = Query(None, alias="projectId"),
    paging: PageParams = Depends(page_params),
    actor: User = Depends(require_user()),
    service: ReimbursementService = Depends(get_reimbursement_service),
):
    items = service.list_visible(
        actor,
        status=parse_enum(ReimbursementStatus, status_filter, "status"),
        project_id=project_id,
    )
    page = paginate(items, paging.page, paging.size)
    return envelope(
        request, [ReimbursementRes.model_validate(r) for r in page.items], page.paging
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_reimbursement(
    request: Request,
    body: ReimbursementReq,
    actor: User = Depends(require_user()),
    service: ReimbursementService = Depends(get_reimbursement_service),
):
    reimbursement = service.create(
        actor, ReimbursementInput(**body.model_dump(by_alias=False))
    )
    return envelope(request, ReimbursementRes.model_validate(reimbursement))


@router.get("/{reimbursement_id}")
def get_reimbursement(
    request: Request,
    reimbursement_id: str,
    actor: User = Depends(require_user()),
    service: ReimbursementService = Depends(get_reimbursement_service),
):
    reimbursement = service.get_visible(actor, reimbursement_id)
    return envelope(request, ReimbursementRes.model_validate(reimbursement))


@router.patch("/{reimbursement_id}/approve")
def approve_reimbursement(
    request: Request,
    reimbursement_id: str,
    actor: User = Depends(require_user()),
    service: ReimbursementService = Depends(get_reimbursement_service),
):
    reimbursement = service.process(actor, reimbursement_id, ReimbursementAction.APPROVE)
    return envelope(request, ReimbursementRes.model_validate(reimbursement))


@router.patch("/{reimbursement_id}/reject")
def reject_reimbursement(
    request: Request,
    reimbursement_id: str,
    body: RejectReq,
    actor: User = Depends(require_user()),
    service: ReimbursementService = Depends(get_reimbursement_service),
):
    reimbursement = service.process(
        actor, reimbursement_id, ReimbursementAction.REJECT, reason=body.reason
    )
    return envelope(request, ReimbursementRes.model_validate(reimbursement))


@router.patch("/{reimbursement_id}/pay")
def pay_reimbursement(
    request: Request,
    reimbursement_id: str,
    actor: User = Depends(require_user()),
    service: ReimbursementService = Depends(get_reimbursement_service),
):
    reimbursement = service.process(actor, reimbursement_id, ReimbursementAction.PAY)
    return envelope(request, ReimbursementRes.model_validate(reimbursement))


@router.post("/{reimbursement_id}/attachments", status_code=status.HTTP_201_CREATED)
async def add_reimbursement_attachment(
    request: Request,
    reimbursement_id: str,
    file: UploadFile = File(...),
    attachment_type: str | None = Form(None, alias="type"),
    actor: User = Depends(require_user()),
    service: ReimbursementService = Depends(get_reimbursement_service),
):
    kind = parse_enum(AttachmentType, attachment_type, "type") or AttachmentType.RECEIPT
    upload = await read_upload(file)
    reimbursement = service.add_attachment(actor, reimbursement_id, upload, kind)
    return envelope(request, ReimbursementRes.model_validate(reimbursement))
