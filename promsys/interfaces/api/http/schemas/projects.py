"""Project, member and activity DTOs."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from .....domain.entities import ProjectStatus
from .common import ApiModel


class ProjectReq(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    client_name: str | None = None
    pt_name: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    contract_value: Decimal | None = Field(default=None, ge=0)
    status: ProjectStatus | None = None


class UpdateProjectReq(ApiModel):
    name: str | None = Field(default=None, max_length=200)
    client_name: str | None = None
    pt_name: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    contract_value: Decimal | None = Field(default=None, ge=0)
    status: ProjectStatus | None = None


class AddMemberReq(ApiModel):
    user_id: str
    role: str | None = None


class ProjectMemberRes(ApiModel):
    user_id: str
    role: str | None = None
    joined_at: datetime


class FinancialSummaryRes(ApiModel):
    total_income: Decimal
    outstanding_income: Decimal
    invoice_expense: Decimal
    reimbursement_expense: Decimal
    total_expense: Decimal
    net_profit: Decimal


class ProjectRes(ApiModel):
    id: str
    name: str
    status: ProjectStatus
    client_name: str | None = None
    pt_name: str | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    contract_value: Decimal | None = None
    created_by_id: str
    members: list[ProjectMemberRes] = []
    created_at: datetime
    updated_at: datetime


class ProjectDetailRes(ProjectRes):
    financial_summary: FinancialSummaryRes
    counts: dict[str, int] = {}


class ActivityReq(ApiModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    activity_date: date | None = None


class UpdateActivityReq(ApiModel):
    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    activity_date: date | None = None


class ActivityRes(ApiModel):
    id: str
    project_id: str
    title: str
    description: str | None = None
    activity_date: date
    created_by_id: str
    created_at: datetime
