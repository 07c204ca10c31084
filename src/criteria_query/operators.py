from enum import Enum


class FilterOperator(str, Enum):
    """Comparison operators a filter can contribute to a predicate."""

    # Equality / ordering
    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    # Set membership
    IN = "in"
    NOT_IN = "not_in"

    # Text
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"

    # Nullness
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
