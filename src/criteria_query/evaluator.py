"""
In-memory operator evaluation strategy.

Provides the ``MemoryOperator`` interface and a registry that maps
``FilterOperator`` -> evaluation strategy.  Specifications delegate
``is_satisfied_by`` to a registry so that the same predicate tree can be
run against plain Python objects without a database.

Null handling follows SQL three-valued logic collapsed to ``False``:
any comparison against a missing value fails, except the explicit
nullness operators.  This keeps in-memory results aligned with what the
SQL backend returns for the same predicate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .exceptions import UnsupportedOperatorError

if TYPE_CHECKING:
    from .operators import FilterOperator


class MemoryOperator(ABC):
    """Strategy interface for evaluating one operator against a value."""

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The value resolved from the candidate object
                (``None`` when the attribute or a joined relation is absent).
            condition_value: The value carried by the specification.

        Returns:
            True if the condition is satisfied.
        """
        ...


class MemoryOperatorRegistry:
    """
    Registry of ``MemoryOperator`` instances keyed by ``FilterOperator``.

    Usage::

        registry = MemoryOperatorRegistry(EqualOperator())

        registry.evaluate(FilterOperator.EQ, actual, expected)
    """

    def __init__(self, *operators: MemoryOperator) -> None:
        self._operators: dict[FilterOperator, MemoryOperator] = {
            operator.name: operator for operator in operators
        }

    def register(self, operator: MemoryOperator) -> None:
        self._operators[operator.name] = operator

    def get(self, name: FilterOperator) -> MemoryOperator | None:
        return self._operators.get(name)

    def evaluate(
        self,
        name: FilterOperator,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """
        Look up the operator and evaluate.

        Raises:
            UnsupportedOperatorError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise UnsupportedOperatorError(str(name.value), "in-memory evaluation")
        return op.evaluate(field_value, condition_value)
