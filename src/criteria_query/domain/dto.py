"""Transfer objects returned by the query services."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .enums import ProjectMemberRole, ProjectPermission


class _DTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class BillDTO(_DTO):
    id: int
    title: str
    closed_timestamp: datetime | None = None
    final_amount: Decimal | None = None
    project_id: int | None = None


class ProductDTO(_DTO):
    id: int
    name: str
    price: Decimal | None = None


class ProjectMemberDTO(_DTO):
    id: int
    role_in_project: ProjectMemberRole | None = None
    added_timestamp: datetime | None = None
    user_id: int | None = None
    project_id: int | None = None
    additional_project_permissions: list[ProjectPermission] = []

    @field_validator("additional_project_permissions", mode="before")
    @classmethod
    def _unwrap_permission_rows(cls, value: Any) -> Any:
        if value is None:
            return []
        return [getattr(item, "permission", item) for item in value]
