"""In-memory storage layer evaluating specifications directly."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..pagination import Page

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..pagination import PageRequest
    from ..specification import BaseSpecification

E = TypeVar("E")


def sort_entities(entities: list[E], sort: Sequence[str]) -> list[E]:
    """
    Sort by attribute names (``-`` prefix = descending); ``None`` sorts last.

    Applies one stable sort per key, last key first.
    """
    ordered = list(entities)
    for field_expr in reversed(sort):
        descending = field_expr.startswith("-")
        name = field_expr.lstrip("-")
        present = [e for e in ordered if getattr(e, name, None) is not None]
        missing = [e for e in ordered if getattr(e, name, None) is None]
        present.sort(key=lambda e: getattr(e, name), reverse=descending)
        ordered = present + missing
    return ordered


class InMemoryCriteriaRepository(Generic[E]):
    """
    Dict-backed repository keyed by each entity's ``id``.

    Every stored object appears at most once in a result, so the distinct
    directive has nothing to remove here.
    """

    def __init__(self, entities: Iterable[E] = (), *, id_attr: str = "id") -> None:
        self._id_attr = id_attr
        self._store: dict[Any, E] = {}
        for entity in entities:
            self._store[getattr(entity, id_attr)] = entity

    async def add(self, entity: E) -> E:
        self._store[getattr(entity, self._id_attr)] = entity
        return entity

    async def get(self, entity_id: Any) -> E | None:
        return self._store.get(entity_id)

    async def find_all(self, spec: BaseSpecification) -> list[E]:
        return [e for e in self._store.values() if spec.is_satisfied_by(e)]

    async def find_page(self, spec: BaseSpecification, page: PageRequest) -> Page[E]:
        matches = sort_entities(await self.find_all(spec), page.sort)
        content = matches[page.offset : page.offset + page.size]
        return Page.of(content, page, len(matches))

    async def count(self, spec: BaseSpecification) -> int:
        return len(await self.find_all(spec))
