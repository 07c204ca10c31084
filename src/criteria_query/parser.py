"""CriteriaParser: query-string parameters -> criteria instance.

Parameters follow the ``<filter>.<operator>=<value>`` convention::

    title.contains=Acme
    projectId.in=3,4
    finalAmount.greaterThan=10
    distinct=true

Filter names are accepted in camelCase or snake_case.  Values stay
strings here and are coerced by the filter models, so a bad value
surfaces as :class:`CriteriaValidationError` with pydantic's error list.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar, get_args

from pydantic import ValidationError

from .criteria import Criteria
from .exceptions import CriteriaValidationError, FilterParseError, UnknownFilterError
from .filters import Filter

C = TypeVar("C", bound=Criteria)

logger = logging.getLogger(__name__)

# Wire operator name -> filter field name.
OPERATOR_PARAMS: dict[str, str] = {
    "equals": "equals",
    "notEquals": "not_equals",
    "specified": "specified",
    "in": "in_",
    "notIn": "not_in",
    "greaterThan": "greater_than",
    "lessThan": "less_than",
    "greaterThanOrEqual": "greater_than_or_equal",
    "lessThanOrEqual": "less_than_or_equal",
    "contains": "contains",
    "doesNotContain": "does_not_contain",
    "startsWith": "starts_with",
    "endsWith": "ends_with",
}

SET_OPERATORS = frozenset({"in_", "not_in"})

# Parameters that travel with criteria but are not filters.
RESERVED_PARAMS = frozenset({"page", "size", "sort"})


class CriteriaParser(Generic[C]):
    """Parse query parameters into a ``criteria_cls`` instance."""

    def __init__(self, criteria_cls: type[C]) -> None:
        self._criteria_cls = criteria_cls
        self._filters: dict[str, tuple[str, type[Filter[Any]]]] = {}
        for name, info in criteria_cls.model_fields.items():
            filter_cls = _filter_type(info.annotation)
            if filter_cls is None:
                continue
            self._filters[name] = (name, filter_cls)
            if info.alias:
                self._filters[info.alias] = (name, filter_cls)

    @property
    def filter_names(self) -> list[str]:
        return sorted(self._filters)

    def parse(self, params: Mapping[str, Any]) -> C:
        """
        Build a criteria object from *params*.

        Args:
            params: Query parameters; a value may be a string or a list of
                strings for repeated parameters.

        Raises:
            UnknownFilterError: A parameter names an undeclared filter.
            FilterParseError: A parameter is missing its operator or uses
                an operator its filter type does not support.
            CriteriaValidationError: A value could not be coerced.
        """
        data: dict[str, Any] = {}
        filters: dict[str, dict[str, Any]] = {}
        for key, raw in params.items():
            if key in RESERVED_PARAMS:
                continue
            if key == "distinct":
                data["distinct"] = _last(raw)
                continue
            field_name, field_op = self._split(key)
            filters.setdefault(field_name, {})[field_op] = (
                _split_values(raw) if field_op in SET_OPERATORS else _last(raw)
            )
        data.update(filters)
        try:
            criteria = self._criteria_cls.model_validate(data)
        except ValidationError as exc:
            raise CriteriaValidationError(
                f"Invalid {self._criteria_cls.__name__} parameters",
                errors=[dict(err) for err in exc.errors()],
            ) from exc
        logger.debug("Parsed %s from %s", criteria, dict(params))
        return criteria

    def _split(self, key: str) -> tuple[str, str]:
        name, sep, op = key.partition(".")
        if name not in self._filters:
            raise UnknownFilterError(
                name, self._criteria_cls.__name__, self.filter_names
            )
        if not sep:
            raise FilterParseError(
                f"Filter '{name}' needs an operator, e.g. '{name}.equals'",
                parameter=key,
            )
        field_name, filter_cls = self._filters[name]
        field_op = OPERATOR_PARAMS.get(op)
        if field_op is None or field_op not in filter_cls.model_fields:
            raise FilterParseError(
                f"Unsupported operator '{op}' for filter '{name}'",
                parameter=key,
            )
        return field_name, field_op


def _filter_type(annotation: Any) -> type[Filter[Any]] | None:
    """Return the filter class inside ``SomeFilter | None``, if any."""
    candidates = get_args(annotation) or (annotation,)
    for candidate in candidates:
        if isinstance(candidate, type) and issubclass(candidate, Filter):
            return candidate
    return None


def _last(raw: Any) -> Any:
    if isinstance(raw, (list, tuple)):
        return raw[-1] if raw else None
    return raw


def _split_values(raw: Any) -> list[str]:
    items = raw if isinstance(raw, (list, tuple)) else [raw]
    out: list[str] = []
    for item in items:
        out.extend(part.strip() for part in str(item).split(",") if part.strip())
    return out
