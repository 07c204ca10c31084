"""
Translate a specification tree into a SQLAlchemy ``Select``.

``apply_specification`` walks the (flattened) predicate in order:

- a :class:`DistinctSpecification` calls ``stmt.distinct()``;
- an :class:`AttributeSpecification` on a root attribute compiles to a
  clause on the model column;
- an :class:`AttributeSpecification` on a joined attribute first issues
  ``LEFT OUTER JOIN`` along the relationship, then compiles the clause
  against the alias.  A to-one relationship is joined once and shared;
  a collection is joined afresh for every condition.

All clauses are ANDed into a single ``WHERE``.  Because the join is an
outer join, a root row whose relationship is absent survives the join
with NULL columns and is then rejected (or accepted, for ``IS NULL``) by
the clause itself.

``apply_page`` adds ordering and limit/offset from a :class:`PageRequest`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, asc, desc, func, select
from sqlalchemy.orm import aliased

from ..specification import (
    AndSpecification,
    AttributeSpecification,
    DistinctSpecification,
    MatchAllSpecification,
)
from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select

    from ..pagination import PageRequest
    from ..specification import BaseSpecification, FieldPath
    from .strategy import SQLAlchemyOperatorRegistry


def apply_specification(
    stmt: Select[Any],
    model: type[Any],
    spec: BaseSpecification,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """
    Apply *spec* to *stmt* (a ``select(model)``).

    Args:
        stmt: The base ``Select`` statement.
        model: The root mapped class.
        spec: The compiled specification.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQLA_REGISTRY``.
    """
    reg = registry or DEFAULT_SQLA_REGISTRY
    joined: dict[str, Any] = {}
    clauses: list[ColumnElement[bool]] = []

    for node in _leaves(spec):
        if isinstance(node, DistinctSpecification):
            if node.distinct:
                stmt = stmt.distinct()
        elif isinstance(node, AttributeSpecification):
            stmt, column = _resolve_column(stmt, model, node.path, joined)
            clauses.append(reg.apply(node.op, column, node.val))
        elif not isinstance(node, MatchAllSpecification):
            raise TypeError(f"Cannot compile {type(node).__name__} to SQL")

    if clauses:
        stmt = stmt.where(and_(*clauses))
    return stmt


def build_select(
    model: type[Any],
    spec: BaseSpecification,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """``select(model)`` filtered by *spec*."""
    return apply_specification(select(model), model, spec, registry=registry)


def build_count(
    model: type[Any],
    spec: BaseSpecification,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """
    Count the rows ``build_select`` would return.

    Counting over a subquery keeps DISTINCT and join multiplicity exactly
    as the row query sees them.
    """
    inner = build_select(model, spec, registry=registry).subquery()
    return select(func.count()).select_from(inner)


def apply_page(
    stmt: Select[Any],
    model: type[Any],
    page: PageRequest,
) -> Select[Any]:
    """Apply ordering and limit/offset; unknown sort fields are ignored."""
    order_clauses: list[Any] = []
    for field_expr in page.sort:
        descending = field_expr.startswith("-")
        col = getattr(model, field_expr.lstrip("-"), None)
        if col is not None:
            order_clauses.append(desc(col) if descending else asc(col))
    if order_clauses:
        stmt = stmt.order_by(*order_clauses)
    return stmt.limit(page.size).offset(page.offset)


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------


def _leaves(spec: BaseSpecification) -> list[BaseSpecification]:
    if isinstance(spec, AndSpecification):
        out: list[BaseSpecification] = []
        for child in spec.specifications:
            out.extend(_leaves(child))
        return out
    return [spec]


def _resolve_column(
    stmt: Select[Any],
    model: type[Any],
    path: FieldPath,
    joined: dict[str, Any],
) -> tuple[Select[Any], Any]:
    """Return ``(stmt, column)``, adding a LEFT OUTER JOIN when needed."""
    if path.join is None:
        column = getattr(model, path.attribute, None)
        if column is None:
            raise AttributeError(
                f"Model {model.__name__} has no attribute {path.attribute}"
            )
        return stmt, column

    target = joined.get(path.join)
    if target is None:
        rel_attr = getattr(model, path.join, None)
        if rel_attr is None or not hasattr(rel_attr.property, "mapper"):
            raise AttributeError(
                f"Model {model.__name__} has no relationship {path.join}"
            )
        target = aliased(rel_attr.property.mapper.class_)
        stmt = stmt.outerjoin(rel_attr.of_type(target))
        # Each condition on a collection gets its own join, so conditions
        # may be met by different related rows.
        if not rel_attr.property.uselist:
            joined[path.join] = target

    column = getattr(target, path.attribute, None)
    if column is None:
        raise AttributeError(
            f"Relationship {path.join} on {model.__name__} has no "
            f"attribute {path.attribute}"
        )
    return stmt, column
