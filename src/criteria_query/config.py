"""Configuration for query services and page parsing."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QueryServiceConfig:
    """
    Paging defaults shared by query services.

    Attributes:
        default_page_size: Page size used when a request does not give one.
        max_page_size: Upper bound a requested page size is clamped to.
        default_sort: Ordering applied to paged queries that specify none,
            so that pages are stable.  Prefix with ``-`` for descending.
    """

    default_page_size: int = 20
    max_page_size: int = 100
    default_sort: tuple[str, ...] = ("id",)

    def __post_init__(self) -> None:
        if self.default_page_size < 1:
            raise ValueError("default_page_size must be >= 1")
        if self.max_page_size < self.default_page_size:
            raise ValueError("max_page_size must be >= default_page_size")


DEFAULT_CONFIG = QueryServiceConfig()
