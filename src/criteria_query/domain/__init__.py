from .criteria import BillCriteria, ProductCriteria, ProjectMemberCriteria
from .dto import BillDTO, ProductDTO, ProjectMemberDTO
from .enums import ProjectMemberRole, ProjectPermission
from .models import (
    Base,
    Bill,
    Product,
    Project,
    ProjectMember,
    ProjectMemberPermission,
    User,
)

__all__ = [
    "Base",
    "Bill",
    "BillCriteria",
    "BillDTO",
    "Product",
    "ProductCriteria",
    "ProductDTO",
    "Project",
    "ProjectMember",
    "ProjectMemberCriteria",
    "ProjectMemberDTO",
    "ProjectMemberPermission",
    "ProjectMemberRole",
    "ProjectPermission",
    "User",
]
