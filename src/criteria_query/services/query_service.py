"""
Generic criteria query service.

A query service ties together the four collaborators a criteria lookup
needs: the compiler, a storage repository, an optional free-text search
repository and a DTO type.  The main input is a criteria object which is
compiled into a specification in a way that all the filters must apply;
the output is a list, a page, or a count of matching entities.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from ..compiler import CriteriaCompiler
from ..config import DEFAULT_CONFIG, QueryServiceConfig

if TYPE_CHECKING:
    from pydantic import BaseModel

    from ..criteria import Criteria
    from ..pagination import Page, PageRequest
    from ..ports import ICriteriaRepository, ISearchRepository
    from ..specification import BaseSpecification

E = TypeVar("E")
C = TypeVar("C", bound="Criteria")
D = TypeVar("D", bound="BaseModel")

logger = logging.getLogger(__name__)


class QueryService(Generic[E, C, D]):
    """
    Execute criteria queries for one entity type.

    Subclasses set ``dto_cls`` and usually nothing else::

        class BillQueryService(QueryService[Bill, BillCriteria, BillDTO]):
            dto_cls = BillDTO
    """

    dto_cls: type[D]

    def __init__(
        self,
        repository: ICriteriaRepository[E],
        *,
        search_repository: ISearchRepository[E] | None = None,
        compiler: CriteriaCompiler | None = None,
        config: QueryServiceConfig = DEFAULT_CONFIG,
    ) -> None:
        self._repository = repository
        self._search_repository = search_repository
        self._compiler = compiler or CriteriaCompiler()
        self._config = config

    @property
    def config(self) -> QueryServiceConfig:
        return self._config

    def create_specification(self, criteria: C | None) -> BaseSpecification:
        """Convert *criteria* to a specification; ``None`` matches everything."""
        return self._compiler.compile(criteria)

    def to_dto(self, entity: E) -> D:
        return self.dto_cls.model_validate(entity)

    async def find_by_criteria(self, criteria: C | None) -> list[D]:
        """Return every entity matching *criteria*, as DTOs."""
        logger.debug("find by criteria : %s", criteria)
        spec = self.create_specification(criteria)
        return [self.to_dto(e) for e in await self._repository.find_all(spec)]

    async def find_page_by_criteria(
        self, criteria: C | None, page: PageRequest
    ) -> Page[D]:
        """Return one page of entities matching *criteria*, as DTOs."""
        logger.debug("find by criteria : %s, page: %s", criteria, page)
        spec = self.create_specification(criteria)
        page = page.with_default_sort(self._config.default_sort)
        result = await self._repository.find_page(spec, page)
        return result.map(self.to_dto)

    async def count_by_criteria(self, criteria: C | None) -> int:
        """Return the number of entities matching *criteria*."""
        logger.debug("count by criteria : %s", criteria)
        return await self._repository.count(self.create_specification(criteria))

    async def search(self, query: str, page: PageRequest) -> Page[D]:
        """
        Free-text search through the search repository.

        Bypasses criteria compilation entirely.

        Raises:
            RuntimeError: If the service was built without a search
                repository.
        """
        logger.debug("search for query : %s, page: %s", query, page)
        if self._search_repository is None:
            raise RuntimeError(
                f"{type(self).__name__} has no search repository configured"
            )
        result = await self._search_repository.search(query, page)
        return result.map(self.to_dto)
