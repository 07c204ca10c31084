"""Storage and search collaborator protocols consumed by query services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from .pagination import Page, PageRequest
    from .specification import BaseSpecification

E = TypeVar("E")


@runtime_checkable
class ICriteriaRepository(Protocol[E]):
    """
    Storage layer that executes compiled specifications.

    The specification is the sole filtering input; failures (connectivity,
    constraint violations) surface unchanged to the caller.
    """

    async def find_all(self, spec: BaseSpecification) -> list[E]: ...

    async def find_page(self, spec: BaseSpecification, page: PageRequest) -> Page[E]: ...

    async def count(self, spec: BaseSpecification) -> int: ...


@runtime_checkable
class ISearchRepository(Protocol[E]):
    """
    Free-text search store kept alongside the primary storage.

    Searching bypasses criteria compilation entirely.
    """

    async def index(self, entity: E) -> None: ...

    async def remove(self, entity_id: Any) -> None: ...

    async def search(self, query: str, page: PageRequest) -> Page[E]: ...
