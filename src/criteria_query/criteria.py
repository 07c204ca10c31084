"""
Criteria: a typed bundle of optional filters for one entity.

A criteria subclass declares its filter fields as ordinary pydantic
fields and a ``field_paths`` table naming, for every filter, the root
attribute or the LEFT-joined relationship attribute it targets::

    class BillCriteria(Criteria):
        field_paths: ClassVar[dict[str, FieldPath]] = {
            "id": FieldPath("id"),
            "project_id": FieldPath("id", join="project"),
        }

        id: LongFilter | None = None
        project_id: LongFilter | None = None

Adding a filter is a matter of adding the field and its table entry; the
compiler walks the table and never needs to change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .specification import FieldPath

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .filters import Filter


class Criteria(BaseModel):
    """Immutable criteria record: ``distinct`` plus one filter per attribute."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    field_paths: ClassVar[dict[str, FieldPath]] = {}

    distinct: bool | None = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        missing = [
            name
            for name in cls.model_fields
            if name != "distinct" and name not in cls.field_paths
        ]
        if missing:
            raise TypeError(
                f"{cls.__name__} declares filters without a field path: "
                f"{', '.join(missing)}"
            )

    def populated_filters(self) -> Iterator[tuple[str, Filter[Any]]]:
        """Yield ``(name, filter)`` for every set filter, in table order."""
        for name in self.field_paths:
            value = getattr(self, name, None)
            if value is not None:
                yield name, value
