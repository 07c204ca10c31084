"""
Immutable predicate tree ("specification") closed under conjunction.

Nodes:

- :class:`MatchAllSpecification`: always true, identity element of ``&``
- :class:`DistinctSpecification`: filters nothing; asks the storage
  layer to de-duplicate result rows
- :class:`AttributeSpecification`: one comparison on a root attribute or
  on an attribute reached through a LEFT join
- :class:`AndSpecification`: ordered conjunction

Combining never mutates an operand: ``a & b`` returns a new node, with
match-all operands dropped and nested conjunctions flattened.  Child
order is preserved, which is what lets the compiler guarantee that a
distinct marker precedes every join-introducing predicate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .operators_memory import DEFAULT_MEMORY_REGISTRY

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry
    from .operators import FilterOperator


@dataclass(frozen=True)
class FieldPath:
    """
    Where a filter points: a root attribute, or an attribute of the entity
    reached by LEFT-joining the relationship named ``join``.

    ``FieldPath("title")`` targets ``Bill.title``;
    ``FieldPath("id", join="project")`` targets ``Bill.project.id``.
    """

    attribute: str
    join: str | None = None

    @property
    def dotted(self) -> str:
        return f"{self.join}.{self.attribute}" if self.join else self.attribute


def _read(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


class BaseSpecification(ABC):
    """Base class for predicate nodes with ``&`` support."""

    @abstractmethod
    def is_satisfied_by(self, candidate: Any) -> bool:
        """Evaluate the predicate against a single object."""
        ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialisable AST of this node."""
        ...

    @property
    def distinct(self) -> bool:
        return False

    @property
    def joins(self) -> tuple[str, ...]:
        return ()

    def __and__(self, other: BaseSpecification) -> BaseSpecification:
        return conjoin(self, other)

    def merge(self, other: BaseSpecification) -> BaseSpecification:
        """Merge with another specification using logical AND."""
        return conjoin(self, other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class MatchAllSpecification(BaseSpecification):
    """Always-true predicate; the starting point of every fold."""

    def is_satisfied_by(self, candidate: Any) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {}


class DistinctSpecification(BaseSpecification):
    """Row de-duplication directive.  Never rejects a candidate."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled

    @property
    def distinct(self) -> bool:
        return self._enabled

    def is_satisfied_by(self, candidate: Any) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"op": "distinct", "val": self._enabled}


class AttributeSpecification(BaseSpecification):
    """
    Specification that checks a single attribute value.

    In-memory evaluation mirrors a LEFT OUTER JOIN: a missing related
    entity resolves to ``None``; a to-many relationship matches when any
    related row matches, and an empty collection behaves as a single row
    of NULLs.
    """

    def __init__(
        self,
        path: FieldPath,
        op: FilterOperator,
        val: Any,
        *,
        registry: MemoryOperatorRegistry | None = None,
    ) -> None:
        self._path = path
        self._op = op
        self._val = val
        self._registry = registry or DEFAULT_MEMORY_REGISTRY

    @property
    def path(self) -> FieldPath:
        return self._path

    @property
    def op(self) -> FilterOperator:
        return self._op

    @property
    def val(self) -> Any:
        return self._val

    @property
    def joins(self) -> tuple[str, ...]:
        return (self._path.join,) if self._path.join else ()

    def is_satisfied_by(self, candidate: Any) -> bool:
        return any(
            self._registry.evaluate(self._op, value, self._val)
            for value in self._resolve(candidate)
        )

    def _resolve(self, candidate: Any) -> list[Any]:
        """Return one value per joined row (always at least one)."""
        if self._path.join is None:
            return [_read(candidate, self._path.attribute)]
        related = _read(candidate, self._path.join)
        if related is None:
            return [None]
        if isinstance(related, list | tuple | set | frozenset):
            values = [_read(item, self._path.attribute) for item in related]
            return values or [None]
        return [_read(related, self._path.attribute)]

    def to_dict(self) -> dict[str, Any]:
        val = list(self._val) if isinstance(self._val, tuple) else self._val
        data: dict[str, Any] = {
            "op": self._op.value,
            "attr": self._path.dotted,
            "val": val,
        }
        if self._path.join:
            data["join"] = "left"
        return data


class AndSpecification(BaseSpecification):
    """Logical AND over an ordered, non-empty tuple of specifications."""

    def __init__(self, *specifications: BaseSpecification) -> None:
        self._specifications = tuple(specifications)

    @property
    def specifications(self) -> tuple[BaseSpecification, ...]:
        return self._specifications

    @property
    def distinct(self) -> bool:
        return any(spec.distinct for spec in self._specifications)

    @property
    def joins(self) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for spec in self._specifications:
            for join in spec.joins:
                seen.setdefault(join, None)
        return tuple(seen)

    def is_satisfied_by(self, candidate: Any) -> bool:
        return all(
            spec.is_satisfied_by(candidate) for spec in self._specifications
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "and",
            "conditions": [spec.to_dict() for spec in self._specifications],
        }


def conjoin(*specs: BaseSpecification) -> BaseSpecification:
    """
    AND the given specifications together, preserving order.

    Match-all operands are dropped and nested conjunctions are spliced in,
    so the result is match-all, a single node, or a flat
    :class:`AndSpecification`.
    """
    flat: list[BaseSpecification] = []
    for spec in specs:
        if isinstance(spec, MatchAllSpecification):
            continue
        if isinstance(spec, AndSpecification):
            flat.extend(spec.specifications)
        else:
            flat.append(spec)
    if not flat:
        return MatchAllSpecification()
    if len(flat) == 1:
        return flat[0]
    return AndSpecification(*flat)
