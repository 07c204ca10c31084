"""
Compile a criteria record into a specification tree.

The compiler is a left fold over the criteria's populated filters:

1. start from :class:`MatchAllSpecification`;
2. if ``distinct`` is set, fold the distinct marker **first**; it must
   precede every join-introducing predicate, because joins can multiply
   rows and some storage layers treat distinct as a statement-level
   toggle rather than a predicate fragment;
3. for each populated filter, in ``field_paths`` order, fold one
   :class:`AttributeSpecification` per populated sub-condition against
   the root attribute or the LEFT-joined attribute the table names;
4. absent filters (and filters with no populated sub-condition) are
   skipped.

The criteria object is frozen and never written to, so compiling the
same criteria twice yields equivalent trees.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .specification import (
    AttributeSpecification,
    BaseSpecification,
    DistinctSpecification,
    MatchAllSpecification,
    conjoin,
)

if TYPE_CHECKING:
    from .criteria import Criteria
    from .evaluator import MemoryOperatorRegistry

logger = logging.getLogger(__name__)


class CriteriaCompiler:
    """Translate any :class:`Criteria` subclass into a specification."""

    def __init__(self, registry: MemoryOperatorRegistry | None = None) -> None:
        self._registry = registry

    def compile(self, criteria: Criteria | None) -> BaseSpecification:
        specs: list[BaseSpecification] = [MatchAllSpecification()]
        if criteria is None:
            return specs[0]

        # Has to be folded first: joins below may multiply rows.
        if criteria.distinct is not None:
            specs.append(DistinctSpecification(criteria.distinct))

        for name, flt in criteria.populated_filters():
            path = criteria.field_paths[name]
            for op, value in flt.conditions():
                specs.append(
                    AttributeSpecification(path, op, value, registry=self._registry)
                )

        specification = conjoin(*specs)
        logger.debug(
            "Compiled %s to %s", type(criteria).__name__, specification.to_dict()
        )
        return specification
