"""
Paging primitives: ``PageRequest`` in, ``Page[T]`` out.

``PageRequest.from_params`` reads Spring-style query parameters
(``page``, ``size``, ``sort=field,desc``) and clamps them against a
:class:`QueryServiceConfig`; bad numbers fall back to defaults instead
of failing the request.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .config import DEFAULT_CONFIG, QueryServiceConfig

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class PageRequest:
    """
    Zero-based page request.

    Attributes:
        page: Page index, starting at 0.
        size: Maximum number of items on the page.
        sort: Ordering fields; prefix with ``-`` for descending,
            e.g. ``("-final_amount", "id")``.
    """

    page: int = 0
    size: int = DEFAULT_CONFIG.default_page_size
    sort: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page must be >= 0")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return self.page * self.size

    def with_default_sort(self, sort: Sequence[str]) -> PageRequest:
        """Return a copy sorted by *sort* if this request has no ordering."""
        if self.sort:
            return self
        return PageRequest(page=self.page, size=self.size, sort=tuple(sort))

    @classmethod
    def from_params(
        cls,
        params: dict[str, Any],
        config: QueryServiceConfig = DEFAULT_CONFIG,
    ) -> PageRequest:
        page = _int_or(params.get("page"), 0)
        size = _int_or(params.get("size"), config.default_page_size)
        size = min(config.max_page_size, max(1, size))
        return cls(page=max(0, page), size=size, sort=_parse_sort(params.get("sort")))


def _int_or(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _parse_sort(raw: Any) -> tuple[str, ...]:
    """
    Parse ``sort`` parameters.

    Accepts a single ``"field,dir"`` string or a list of them (repeated
    ``sort=`` parameters); ``dir`` is ``asc`` (default) or ``desc``.
    """
    if not raw:
        return ()
    items = [raw] if isinstance(raw, str) else list(raw)
    out: list[str] = []
    for item in items:
        parts = [p.strip() for p in str(item).split(",") if p.strip()]
        if not parts:
            continue
        name = parts[0]
        descending = len(parts) > 1 and parts[1].lower() == "desc"
        out.append(f"-{name}" if descending else name)
    return tuple(out)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total across all pages."""

    content: list[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    def map(self, fn: Callable[[T], R]) -> Page[R]:
        return Page(
            content=[fn(item) for item in self.content],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )

    @classmethod
    def of(cls, content: list[T], request: PageRequest, total: int) -> Page[T]:
        return cls(
            content=content,
            page=request.page,
            size=request.size,
            total_elements=total,
        )
