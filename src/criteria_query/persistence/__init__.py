"""
Specification-to-SQLAlchemy compilation and the SQL storage layer.

Public API:
    - ``apply_specification(stmt, model, spec)``: fold a specification
      into a ``Select`` (LEFT joins, DISTINCT, WHERE)
    - ``build_select`` / ``build_count`` / ``apply_page``: statement helpers
    - ``SQLAlchemyCriteriaRepository``: async ``find_all`` / ``find_page`` /
      ``count`` over an ``AsyncSession``
    - ``SQLAlchemyOperator`` / ``SQLAlchemyOperatorRegistry``: extension
      points for custom operators
"""

from .compiler import apply_page, apply_specification, build_count, build_select
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .repository import SQLAlchemyCriteriaRepository
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    "apply_page",
    "apply_specification",
    "build_count",
    "build_select",
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    "SQLAlchemyCriteriaRepository",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
]
