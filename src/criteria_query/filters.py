"""
Typed filters: the leaves of a criteria record.

A filter bundles optional sub-conditions over one attribute.  Each
populated sub-condition becomes one ``(FilterOperator, value)`` pair in
:meth:`Filter.conditions`; unset sub-conditions contribute nothing, so a
filter with every sub-condition unset behaves exactly like an absent
filter.

Filters are frozen pydantic models: values are validated (and coerced)
once, at construction, and a non-parseable bound is rejected there
rather than inside the compiler::

    LongFilter(greater_than="10")      # -> greater_than == 10
    LongFilter(greater_than="ten")     # -> pydantic.ValidationError

Field names are snake_case in Python and camelCase on the wire
(``notEquals``, ``greaterThanOrEqual``, ``in``), matching the usual
REST query-string convention.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, ClassVar, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .operators import FilterOperator

T = TypeVar("T")

Condition = tuple[FilterOperator, Any]


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# Instants are stored as naive UTC; aware bounds are converted on the way in.
UtcDateTime = Annotated[datetime, AfterValidator(_as_naive_utc)]


class Filter(BaseModel, Generic[T]):
    """Equality, set-membership and nullness conditions over one attribute."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    # Order of this table is the order conditions are emitted in.
    operator_fields: ClassVar[tuple[tuple[str, FilterOperator], ...]] = (
        ("equals", FilterOperator.EQ),
        ("not_equals", FilterOperator.NE),
        ("in_", FilterOperator.IN),
        ("not_in", FilterOperator.NOT_IN),
    )

    equals: T | None = None
    not_equals: T | None = None
    specified: bool | None = None
    in_: tuple[T, ...] | None = Field(default=None, alias="in")
    not_in: tuple[T, ...] | None = None

    def conditions(self) -> tuple[Condition, ...]:
        """Return the populated sub-conditions as ``(operator, value)`` pairs.

        ``specified=True`` maps to IS NOT NULL and ``specified=False`` to
        IS NULL.  An empty ``in`` set is kept: it is a real constraint
        that matches nothing.
        """
        out: list[Condition] = []
        for name, operator in self.operator_fields:
            value = getattr(self, name)
            if value is not None:
                out.append((operator, value))
        if self.specified is not None:
            out.append(
                (
                    FilterOperator.IS_NOT_NULL
                    if self.specified
                    else FilterOperator.IS_NULL,
                    None,
                )
            )
        return tuple(out)

    def is_empty(self) -> bool:
        return not self.conditions()


class RangeFilter(Filter[T], Generic[T]):
    """Filter over an ordered type: adds the four comparison bounds."""

    operator_fields: ClassVar[tuple[tuple[str, FilterOperator], ...]] = (
        *Filter.operator_fields,
        ("greater_than", FilterOperator.GT),
        ("less_than", FilterOperator.LT),
        ("greater_than_or_equal", FilterOperator.GE),
        ("less_than_or_equal", FilterOperator.LE),
    )

    greater_than: T | None = None
    less_than: T | None = None
    greater_than_or_equal: T | None = None
    less_than_or_equal: T | None = None


class StringFilter(Filter[str]):
    """Filter over text: adds substring, prefix and suffix matching."""

    operator_fields: ClassVar[tuple[tuple[str, FilterOperator], ...]] = (
        *Filter.operator_fields,
        ("contains", FilterOperator.CONTAINS),
        ("does_not_contain", FilterOperator.NOT_CONTAINS),
        ("starts_with", FilterOperator.STARTSWITH),
        ("ends_with", FilterOperator.ENDSWITH),
    )

    contains: str | None = None
    does_not_contain: str | None = None
    starts_with: str | None = None
    ends_with: str | None = None


LongFilter = RangeFilter[int]
BigDecimalFilter = RangeFilter[Decimal]
InstantFilter = RangeFilter[UtcDateTime]

__all__ = [
    "BigDecimalFilter",
    "Condition",
    "Filter",
    "InstantFilter",
    "LongFilter",
    "RangeFilter",
    "StringFilter",
    "UtcDateTime",
]
