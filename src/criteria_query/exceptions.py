"""
Criteria exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``CriteriaError`` and provide ``to_dict()``
for API-friendly error responses.  The compiler itself never raises on a
well-formed criteria object; these errors belong to the boundaries around
it (filter validation, query-string parsing, operator registries).
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class CriteriaError(Exception):
    """Base exception for all criteria errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class CriteriaValidationError(CriteriaError):
    """
    A filter value failed validation at the filter-type boundary.

    Carries the structured error list produced by pydantic, each entry
    with ``loc`` / ``msg`` / ``type`` keys.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.errors = errors or []
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "CRITERIA_VALIDATION_ERROR",
            "message": self.message,
            "errors": [
                {
                    "loc": ".".join(str(part) for part in err.get("loc", ())),
                    "msg": err.get("msg", ""),
                }
                for err in self.errors
            ],
        }


class FilterParseError(CriteriaError):
    """A query-string parameter could not be parsed into a filter."""

    def __init__(self, message: str, parameter: str | None = None) -> None:
        self.message = message
        self.parameter = parameter
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FILTER_PARSE_ERROR",
            "message": self.message,
            "parameter": self.parameter,
        }


class UnknownFilterError(FilterParseError):
    """
    A parameter names a filter the criteria type does not declare.

    Example error message::

        Unknown filter 'projcetId' on 'BillCriteria'.
        Did you mean: projectId?
    """

    def __init__(
        self,
        filter_name: str,
        criteria_name: str,
        available_filters: list[str],
    ) -> None:
        self.filter_name = filter_name
        self.criteria_name = criteria_name
        self.available_filters = available_filters
        self.suggestions = get_close_matches(
            filter_name, available_filters, n=3, cutoff=0.6
        )

        message = f"Unknown filter '{filter_name}' on '{criteria_name}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message, parameter=filter_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_FILTER",
            "filter": self.filter_name,
            "criteria": self.criteria_name,
            "suggestions": self.suggestions,
            "available_filters": sorted(self.available_filters),
        }


class UnsupportedOperatorError(CriteriaError):
    """An operator registry has no strategy for the requested operator."""

    def __init__(self, operator: str, backend: str) -> None:
        self.operator = operator
        self.backend = backend
        super().__init__(f"Unsupported operator for {backend}: {operator}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_OPERATOR",
            "operator": self.operator,
            "backend": self.backend,
        }
