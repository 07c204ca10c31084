from __future__ import annotations

import enum


class ProjectPermission(str, enum.Enum):
    ADD_MEMBER = "ADD_MEMBER"
    REMOVE_MEMBER = "REMOVE_MEMBER"
    ADD_BILL = "ADD_BILL"
    EDIT_BILL = "EDIT_BILL"
    CLOSE_BILL = "CLOSE_BILL"
    DELETE_BILL = "DELETE_BILL"


class ProjectMemberRole(str, enum.Enum):
    PROJECT_ADMIN = "PROJECT_ADMIN"
    PROJECT_MEMBER = "PROJECT_MEMBER"
    PROJECT_GUEST = "PROJECT_GUEST"
