from __future__ import annotations

from typing import ClassVar

from ..criteria import Criteria
from ..filters import (
    BigDecimalFilter,
    Filter,
    InstantFilter,
    LongFilter,
    StringFilter,
)
from ..specification import FieldPath
from .enums import ProjectMemberRole, ProjectPermission


class BillCriteria(Criteria):
    field_paths: ClassVar[dict[str, FieldPath]] = {
        "id": FieldPath("id"),
        "title": FieldPath("title"),
        "closed_timestamp": FieldPath("closed_timestamp"),
        "final_amount": FieldPath("final_amount"),
        "project_id": FieldPath("id", join="project"),
    }

    id: LongFilter | None = None
    title: StringFilter | None = None
    closed_timestamp: InstantFilter | None = None
    final_amount: BigDecimalFilter | None = None
    project_id: LongFilter | None = None


class ProjectMemberCriteria(Criteria):
    field_paths: ClassVar[dict[str, FieldPath]] = {
        "id": FieldPath("id"),
        "additional_project_permissions": FieldPath(
            "permission", join="additional_project_permissions"
        ),
        "role_in_project": FieldPath("role_in_project"),
        "added_timestamp": FieldPath("added_timestamp"),
        "user_id": FieldPath("id", join="user"),
        "user_login": FieldPath("login", join="user"),
        "project_id": FieldPath("id", join="project"),
    }

    id: LongFilter | None = None
    additional_project_permissions: Filter[ProjectPermission] | None = None
    role_in_project: Filter[ProjectMemberRole] | None = None
    added_timestamp: InstantFilter | None = None
    user_id: LongFilter | None = None
    user_login: StringFilter | None = None
    project_id: LongFilter | None = None


class ProductCriteria(Criteria):
    field_paths: ClassVar[dict[str, FieldPath]] = {
        "id": FieldPath("id"),
        "name": FieldPath("name"),
        "price": FieldPath("price"),
    }

    id: LongFilter | None = None
    name: StringFilter | None = None
    price: BigDecimalFilter | None = None
