from .repository import InMemoryCriteriaRepository, sort_entities
from .search import InMemorySearchRepository

__all__ = [
    "InMemoryCriteriaRepository",
    "InMemorySearchRepository",
    "sort_entities",
]
