"""
Name: Reimbursement Service

Responsibilities:
  - Submit reimbursements and list/read them with per-role visibility
  - Process them (approve / reject / pay) through ProcessReimbursementUseCase
  - Store receipts and payment proofs as typed attachments

Collaborators:
  - domain.reimbursement_workflow
  - application.usecases.process_reimbursement
  - application.notifications.NotificationService: REIMBURSEMENT_SUBMITTED

Constraints:
  - Processors (admin, finance) see every reimbursement; others only their own
  - PAYMENT attachments can only be added by processors, once the
    reimbursement is PAID
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from ..crosscutting.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
)
from ..domain.entities import NotificationType, Reimbursement, User, new_id, utcnow
from ..domain.reimbursement_workflow import (
    AttachmentType,
    ReimbursementAction,
    ReimbursementStatus,
    is_processor,
)
from ..domain.repositories import (
    CategoryRepository,
    FileStorage,
    ProjectRepository,
    ReimbursementRepository,
    UserRepository,
)
from ..domain.roles import UserRole
from .files import UploadedFile, store_attachment
from .notifications import NotificationService
from .usecases.process_reimbursement import (
    ProcessReimbursementInput,
    ProcessReimbursementUseCase,
)


@dataclass
class ReimbursementInput:
    title: Optional[str] = None
    amount: Optional[Decimal] = None
    category_id: Optional[str] = None
    description: Optional[str] = None
    project_id: Optional[str] = None


class ReimbursementService:
    def __init__(
        self,
        reimbursements: ReimbursementRepository,
        categories: CategoryRepository,
        projects: ProjectRepository,
        users: UserRepository,
        storage: FileStorage,
        notifications: NotificationService,
    ):
        self.reimbursements = reimbursements
        self.categories = categories
        self.projects = projects
        self.users = users
        self.storage = storage
        self.notifications = notifications
        self.process_use_case = ProcessReimbursementUseCase(reimbursements, notifications)

    @staticmethod
    def can_see(actor: User, reimbursement: Reimbursement) -> bool:
        return is_processor(actor.role) or reimbursement.submitted_by_id == actor.id

    def list_visible(
        self,
        actor: User,
        *,
        status: ReimbursementStatus | None = None,
        project_id: str | None = None,
    ) -> List[Reimbursement]:
        def predicate(r: Reimbursement) -> bool:
            if not self.can_see(actor, r):
                return False
            if status is not None and r.status != status:
                return False
            if project_id is not None and r.project_id != project_id:
                return False
            return True

        return self.reimbursements.list(predicate)

    def get_visible(self, actor: User, reimbursement_id: str) -> Reimbursement:
        reimbursement = self.reimbursements.get(reimbursement_id)
        if reimbursement is None or not self.can_see(actor, reimbursement):
            raise NotFoundError("Reimbursement", reimbursement_id)
        return reimbursement

    def create(self, actor: User, data: ReimbursementInput) -> Reimbursement:
        title = (data.title or "").strip()
        if not title:
            raise ValidationFailedError("Title is required", field="title")
        if data.amount is None or data.amount <= 0:
            raise ValidationFailedError("Amount must be greater than 0", field="amount")
        if not data.category_id or self.categories.get(data.category_id) is None:
            raise NotFoundError("Category", data.category_id or "")
        if data.project_id and self.projects.get(data.project_id) is None:
            raise NotFoundError("Project", data.project_id)

        reimbursement = self.reimbursements.add(
            Reimbursement(
                id=new_id(),
                title=title,
                amount=data.amount,
                category_id=data.category_id,
                submitted_by_id=actor.id,
                description=data.description,
                project_id=data.project_id,
            )
        )
        processors = [
            u.id
            for u in self.users.list(lambda u: u.role in (UserRole.ADMIN, UserRole.FINANCE))
        ]
        self.notifications.notify(
            processors,
            type=NotificationType.REIMBURSEMENT_SUBMITTED,
            title="Reimbursement submitted",
            message=f'"{reimbursement.title}" awaits review',
            link_url=f"/dashboard/reimbursement/{reimbursement.id}",
            actor_id=actor.id,
        )
        return reimbursement

    def process(
        self,
        actor: User,
        reimbursement_id: str,
        action: ReimbursementAction,
        reason: str | None = None,
    ) -> Reimbursement:
        return self.process_use_case.execute(
            ProcessReimbursementInput(
                reimbursement_id=reimbursement_id,
                action=action,
                actor=actor,
                reason=reason,
            )
        )

    def add_attachment(
        self,
        actor: User,
        reimbursement_id: str,
        upload: UploadedFile,
        attachment_type: AttachmentType = AttachmentType.RECEIPT,
    ) -> Reimbursement:
        reimbursement = self.get_visible(actor, reimbursement_id)
        if attachment_type == AttachmentType.PAYMENT:
            if not is_processor(actor.role):
                raise ForbiddenError("Only admin or finance can attach payment proof")
            if reimbursement.status != ReimbursementStatus.PAID:
                raise ConflictError("Payment proof requires a PAID reimbursement")
        reimbursement.attachments.append(
            store_attachment(
                self.storage,
                upload,
                uploaded_by_id=actor.id,
                attachment_type=attachment_type,
            )
        )
        reimbursement.updated_at = utcnow()
        return self.reimbursements.update(reimbursement)
