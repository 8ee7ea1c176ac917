"""Settings catalogs (vendors, taxes, categories) and team DTOs."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from .....domain.entities import CategoryType
from .common import ApiModel


class VendorReq(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    location: str = Field(..., min_length=1, max_length=500)
    category_id: str | None = None
    contact_person: str | None = None
    phone: str | None = None
    email: str | None = None


class UpdateVendorReq(ApiModel):
    name: str | None = Field(default=None, max_length=200)
    location: str | None = Field(default=None, max_length=500)
    category_id: str | None = None
    contact_person: str | None = None
    phone: str | None = None
    email: str | None = None


class VendorRes(ApiModel):
    id: str
    name: str
    location: str
    category_id: str | None = None
    contact_person: str | None = None
    phone: str | None = None
    email: str | None = None
    created_at: datetime


class TaxReq(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    percentage: Decimal
    is_active: bool = True


class UpdateTaxReq(ApiModel):
    name: str | None = Field(default=None, max_length=100)
    percentage: Decimal | None = None
    is_active: bool | None = None


class TaxRes(ApiModel):
    id: str
    name: str
    percentage: Decimal
    is_active: bool
    created_at: datetime


class CategoryReq(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: CategoryType


class UpdateCategoryReq(ApiModel):
    name: str | None = Field(default=None, max_length=100)
    type: CategoryType | None = None


class CategoryRes(ApiModel):
    id: str
    name: str
    type: CategoryType
    created_at: datetime


class TeamReq(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None


class UpdateTeamReq(ApiModel):
    name: str | None = Field(default=None, max_length=200)
    description: str | None = None


class TeamMemberReq(ApiModel):
    user_id: str


class TeamMemberRes(ApiModel):
    user_id: str
    role: str | None = None
    joined_at: datetime


class TeamRes(ApiModel):
    id: str
    name: str
    description: str | None = None
    members: list[TeamMemberRes] = []
    created_at: datetime
