"""SQLAlchemy operator implementations and default registry."""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import false

from ..operators import FilterOperator
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class EqualOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.EQ

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", op_module.eq(column, value))


class NotEqualOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NE

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", op_module.ne(column, value))


class GreaterThanOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GT

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", op_module.gt(column, value))


class LessThanOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LT

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", op_module.lt(column, value))


class GreaterEqualOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GE

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", op_module.ge(column, value))


class LessEqualOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LE

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", op_module.le(column, value))


class InOperator(SQLAlchemyOperator):
    """``IN``; an empty set renders a constant false clause."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        if not value:
            return false()
        return cast("ColumnElement[bool]", column.in_(list(value)))


class NotInOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_IN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        if not value:
            return cast("ColumnElement[bool]", column.is_not(None))
        return cast("ColumnElement[bool]", column.not_in(list(value)))


class ContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.CONTAINS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.icontains(value, autoescape=True))


class NotContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_CONTAINS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", ~column.icontains(value, autoescape=True))


class StartsWithOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.STARTSWITH

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast(
            "ColumnElement[bool]", column.istartswith(value, autoescape=True)
        )


class EndsWithOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.ENDSWITH

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.iendswith(value, autoescape=True))


class IsNullOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NULL

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_(None))


class IsNotNullOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NOT_NULL

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_not(None))


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create a registry with all built-in SQLAlchemy operators."""
    return SQLAlchemyOperatorRegistry(
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        LessThanOperator(),
        GreaterEqualOperator(),
        LessEqualOperator(),
        InOperator(),
        NotInOperator(),
        ContainsOperator(),
        NotContainsOperator(),
        StartsWithOperator(),
        EndsWithOperator(),
        IsNullOperator(),
        IsNotNullOperator(),
    )


DEFAULT_SQLA_REGISTRY: SQLAlchemyOperatorRegistry = build_default_sqla_registry()
