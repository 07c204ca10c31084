from .entities import BillQueryService, ProductQueryService, ProjectMemberQueryService
from .query_service import QueryService

__all__ = [
    "BillQueryService",
    "ProductQueryService",
    "ProjectMemberQueryService",
    "QueryService",
]
