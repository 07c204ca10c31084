"""Query services for the concrete entities."""

from __future__ import annotations

import logging

from ..domain import (
    Bill,
    BillCriteria,
    BillDTO,
    Product,
    ProductCriteria,
    ProductDTO,
    ProjectMember,
    ProjectMemberCriteria,
    ProjectMemberDTO,
    ProjectMemberRole,
    ProjectPermission,
)
from ..filters import Filter, StringFilter
from .query_service import QueryService

logger = logging.getLogger(__name__)


class BillQueryService(QueryService[Bill, BillCriteria, BillDTO]):
    dto_cls = BillDTO


class ProductQueryService(QueryService[Product, ProductCriteria, ProductDTO]):
    dto_cls = ProductDTO


class ProjectMemberQueryService(
    QueryService[ProjectMember, ProjectMemberCriteria, ProjectMemberDTO]
):
    dto_cls = ProjectMemberDTO

    @staticmethod
    def admin_criteria(login: str) -> ProjectMemberCriteria:
        """
        Criteria selecting the memberships through which *login* administers
        a project: role ``PROJECT_ADMIN`` holding the ``ADD_MEMBER``
        permission.  ``distinct`` is set because the permission filter joins
        a collection.
        """
        return ProjectMemberCriteria(
            distinct=True,
            user_login=StringFilter(equals=login),
            additional_project_permissions=Filter[ProjectPermission](
                in_=(ProjectPermission.ADD_MEMBER,)
            ),
            role_in_project=Filter[ProjectMemberRole](
                in_=(ProjectMemberRole.PROJECT_ADMIN,)
            ),
        )

    async def find_by_admin_user_login(self, login: str) -> list[ProjectMember]:
        """Return the admin memberships of *login* as entities."""
        logger.debug("find admin memberships for user : %s", login)
        spec = self.create_specification(self.admin_criteria(login))
        return list(await self._repository.find_all(spec))
