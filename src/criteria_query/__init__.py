"""
criteria-query: compile typed filter criteria into composable predicates.

Public API:
    - Filters: ``Filter``, ``RangeFilter``, ``StringFilter`` and the
      ``LongFilter`` / ``BigDecimalFilter`` / ``InstantFilter`` aliases
    - ``Criteria`` and ``FieldPath`` to declare a criteria type
    - ``CriteriaCompiler`` to turn criteria into a specification tree
    - ``CriteriaParser`` to read criteria from query-string parameters
    - ``QueryService`` plus paging (``PageRequest``, ``Page``)
"""

from .compiler import CriteriaCompiler
from .config import DEFAULT_CONFIG, QueryServiceConfig
from .criteria import Criteria
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    CriteriaError,
    CriteriaValidationError,
    FilterParseError,
    UnknownFilterError,
    UnsupportedOperatorError,
)
from .filters import (
    BigDecimalFilter,
    Filter,
    InstantFilter,
    LongFilter,
    RangeFilter,
    StringFilter,
)
from .operators import FilterOperator
from .operators_memory import DEFAULT_MEMORY_REGISTRY, build_default_registry
from .pagination import Page, PageRequest
from .parser import CriteriaParser
from .ports import ICriteriaRepository, ISearchRepository
from .services import QueryService
from .specification import (
    AndSpecification,
    AttributeSpecification,
    BaseSpecification,
    DistinctSpecification,
    FieldPath,
    MatchAllSpecification,
    conjoin,
)

__all__ = [
    # Criteria
    "Criteria",
    "CriteriaCompiler",
    "CriteriaParser",
    "FieldPath",
    # Filters
    "BigDecimalFilter",
    "Filter",
    "FilterOperator",
    "InstantFilter",
    "LongFilter",
    "RangeFilter",
    "StringFilter",
    # Specifications
    "AndSpecification",
    "AttributeSpecification",
    "BaseSpecification",
    "DistinctSpecification",
    "MatchAllSpecification",
    "conjoin",
    # Evaluation
    "DEFAULT_MEMORY_REGISTRY",
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
    # Services and paging
    "DEFAULT_CONFIG",
    "ICriteriaRepository",
    "ISearchRepository",
    "Page",
    "PageRequest",
    "QueryService",
    "QueryServiceConfig",
    # Exceptions
    "CriteriaError",
    "CriteriaValidationError",
    "FilterParseError",
    "UnknownFilterError",
    "UnsupportedOperatorError",
]
