"""
SQLAlchemy operator compilation strategy.

Same strategy pattern as the in-memory evaluator: one small class per
operator, collected in a registry keyed by ``FilterOperator``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..exceptions import UnsupportedOperatorError

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from ..operators import FilterOperator


class SQLAlchemyOperator(ABC):
    """
    Strategy interface for compiling a filter operator into a SQLAlchemy
    ``ColumnElement[bool]``.
    """

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        """
        Build a SQLAlchemy filter clause.

        Args:
            column: A mapped column or instrumented attribute, possibly on
                an aliased joined entity.
            value: The condition value from the specification.
        """
        ...


class SQLAlchemyOperatorRegistry:
    def __init__(self, *operators: SQLAlchemyOperator) -> None:
        self._operators: dict[FilterOperator, SQLAlchemyOperator] = {
            operator.name: operator for operator in operators
        }

    def register(self, operator: SQLAlchemyOperator) -> None:
        self._operators[operator.name] = operator

    def get(self, name: FilterOperator) -> SQLAlchemyOperator | None:
        return self._operators.get(name)

    def apply(
        self,
        name: FilterOperator,
        column: Any,
        value: Any,
    ) -> ColumnElement[bool]:
        """
        Look up the operator and apply.

        Raises:
            UnsupportedOperatorError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise UnsupportedOperatorError(str(name.value), "SQLAlchemy")
        return op.apply(column, value)
