from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..pagination import Page
from .compiler import apply_page, build_count, build_select

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from ..pagination import PageRequest
    from ..specification import BaseSpecification
    from .strategy import SQLAlchemyOperatorRegistry

E = TypeVar("E")

logger = logging.getLogger(__name__)


class SQLAlchemyCriteriaRepository(Generic[E]):
    """
    Executes compiled specifications against a mapped model.

    The session is owned by the caller (request scope, test fixture);
    the repository neither commits nor wraps errors, so database failures
    reach the caller as the original SQLAlchemy exceptions.

    Usage::

        repo = SQLAlchemyCriteriaRepository(Bill, session)
        spec = CriteriaCompiler().compile(BillCriteria(title=...))
        bills = await repo.find_all(spec)
        total = await repo.count(spec)
    """

    def __init__(
        self,
        model: type[E],
        session: AsyncSession,
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        self.model = model
        self._session = session
        self._registry = registry

    async def find_all(self, spec: BaseSpecification) -> list[E]:
        stmt = build_select(self.model, spec, registry=self._registry)
        logger.debug("Executing %s", stmt)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def find_page(self, spec: BaseSpecification, page: PageRequest) -> Page[E]:
        total = await self.count(spec)
        stmt = apply_page(
            build_select(self.model, spec, registry=self._registry),
            self.model,
            page,
        )
        result = await self._session.execute(stmt)
        return Page.of(list(result.scalars().all()), page, total)

    async def count(self, spec: BaseSpecification) -> int:
        result = await self._session.execute(
            build_count(self.model, spec, registry=self._registry)
        )
        return int(result.scalar_one())

    async def add(self, entity: E) -> E:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def get(self, entity_id: Any) -> E | None:
        return await self._session.get(self.model, entity_id)
