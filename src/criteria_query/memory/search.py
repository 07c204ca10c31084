"""
In-memory free-text search store.

Supports a small subset of query-string syntax:

- ``*`` or an empty query matches every indexed entity;
- bare terms must each appear (case-insensitively) in one of the indexed
  text fields;
- ``field:term`` restricts a term to one indexed field.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..pagination import Page
from .repository import sort_entities

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..pagination import PageRequest

E = TypeVar("E")

logger = logging.getLogger(__name__)


class InMemorySearchRepository(Generic[E]):
    def __init__(self, fields: Sequence[str], *, id_attr: str = "id") -> None:
        if not fields:
            raise ValueError("At least one indexed field is required")
        self._fields = tuple(fields)
        self._id_attr = id_attr
        self._documents: dict[Any, E] = {}

    async def index(self, entity: E) -> None:
        self._documents[getattr(entity, self._id_attr)] = entity

    async def remove(self, entity_id: Any) -> None:
        self._documents.pop(entity_id, None)

    async def search(self, query: str, page: PageRequest) -> Page[E]:
        terms = self._parse(query)
        logger.debug("Searching %d documents for %r", len(self._documents), terms)
        hits = [e for e in self._documents.values() if self._matches(e, terms)]
        hits = sort_entities(hits, page.sort or (self._id_attr,))
        content = hits[page.offset : page.offset + page.size]
        return Page.of(content, page, len(hits))

    def _parse(self, query: str) -> list[tuple[str | None, str]]:
        terms: list[tuple[str | None, str]] = []
        for token in query.split():
            if token == "*":
                continue
            field, sep, value = token.partition(":")
            if sep and field in self._fields:
                terms.append((field, value.lower()))
            else:
                terms.append((None, token.lower()))
        return terms

    def _matches(self, entity: E, terms: list[tuple[str | None, str]]) -> bool:
        texts = {
            name: str(value).lower()
            for name in self._fields
            if (value := getattr(entity, name, None)) is not None
        }
        for field, term in terms:
            haystack = [texts.get(field, "")] if field else list(texts.values())
            if not any(term in text for text in haystack):
                return False
        return True
