"""Concrete in-memory operators and the default registry factory."""

from __future__ import annotations

from typing import Any

from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .operators import FilterOperator

# -- equality / ordering ------------------------------------------------------


class EqualOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.EQ

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value == condition_value)


class NotEqualOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value != condition_value)


class GreaterThanOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GT

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value > condition_value)


class LessThanOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LT

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value < condition_value)


class GreaterEqualOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value >= condition_value)


class LessEqualOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return bool(field_value <= condition_value)


# -- set membership -----------------------------------------------------------


class InOperator(MemoryOperator):
    """Membership test; an empty set matches nothing."""

    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or not condition_value:
            return False
        return field_value in condition_value


class NotInOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return field_value not in condition_value


# -- text ---------------------------------------------------------------------


class ContainsOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.CONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(condition_value).lower() in str(field_value).lower()


class NotContainsOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_CONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(condition_value).lower() not in str(field_value).lower()


class StartsWithOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.STARTSWITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(field_value).lower().startswith(str(condition_value).lower())


class EndsWithOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.ENDSWITH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return str(field_value).lower().endswith(str(condition_value).lower())


# -- nullness -----------------------------------------------------------------


class IsNullOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NULL

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return field_value is None


class IsNotNullOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.IS_NOT_NULL

    def evaluate(self, field_value: Any, _condition_value: Any) -> bool:
        return field_value is not None


def build_default_registry() -> MemoryOperatorRegistry:
    """Create a fresh registry populated with every built-in operator."""
    return MemoryOperatorRegistry(
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


DEFAULT_MEMORY_REGISTRY: MemoryOperatorRegistry = build_default_registry()
