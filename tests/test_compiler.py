"""Tests for compiling criteria into specifications."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import ClassVar

import pytest

from criteria_query import (
    AndSpecification,
    Criteria,
    CriteriaCompiler,
    CriteriaParser,
    DistinctSpecification,
    FieldPath,
    LongFilter,
    MatchAllSpecification,
    StringFilter,
)
from criteria_query.domain import (
    BillCriteria,
    ProjectMemberCriteria,
    ProjectPermission,
)
from criteria_query.filters import Filter
from criteria_query.memory import InMemoryCriteriaRepository


@pytest.fixture
def compiler() -> CriteriaCompiler:
    return CriteriaCompiler()


@pytest.fixture
def bills(graph) -> InMemoryCriteriaRepository:
    return InMemoryCriteriaRepository(graph["bills"])


@pytest.fixture
def members(graph) -> InMemoryCriteriaRepository:
    return InMemoryCriteriaRepository(graph["members"])


def _ids(entities) -> list[int]:
    return sorted(e.id for e in entities)


class TestMatchAll:
    def test_none_criteria(self, compiler):
        assert isinstance(compiler.compile(None), MatchAllSpecification)

    def test_all_filters_absent(self, compiler):
        assert isinstance(compiler.compile(BillCriteria()), MatchAllSpecification)

    def test_filters_without_conditions_are_skipped(self, compiler):
        criteria = BillCriteria(id=LongFilter(), title=StringFilter())
        assert isinstance(compiler.compile(criteria), MatchAllSpecification)

    async def test_match_all_returns_everything(self, compiler, bills):
        assert _ids(await bills.find_all(compiler.compile(None))) == [1, 2, 3, 4]


class TestFold:
    def test_single_condition_is_a_single_node(self, compiler):
        spec = compiler.compile(BillCriteria(id=LongFilter(equals=1)))
        assert spec.to_dict() == {"op": "=", "attr": "id", "val": 1}

    def test_one_node_per_sub_condition(self, compiler):
        criteria = BillCriteria(id=LongFilter(greater_than=1, less_than=4))
        spec = compiler.compile(criteria)
        assert isinstance(spec, AndSpecification)
        assert [s.to_dict()["op"] for s in spec.specifications] == [">", "<"]

    def test_distinct_is_folded_first(self, compiler):
        criteria = ProjectMemberCriteria(
            additional_project_permissions=Filter[ProjectPermission](
                in_=(ProjectPermission.ADD_MEMBER,)
            ),
            id=LongFilter(greater_than=0),
            distinct=True,
        )
        spec = compiler.compile(criteria)
        assert isinstance(spec, AndSpecification)
        first, *rest = spec.specifications
        assert isinstance(first, DistinctSpecification)
        assert all(not isinstance(s, DistinctSpecification) for s in rest)
        assert spec.distinct
        assert spec.joins == ("additional_project_permissions",)

    def test_distinct_false_is_kept_as_a_directive(self, compiler):
        spec = compiler.compile(BillCriteria(distinct=False))
        assert spec.to_dict() == {"op": "distinct", "val": False}
        assert not spec.distinct

    def test_joined_filter_targets_related_attribute(self, compiler):
        spec = compiler.compile(BillCriteria(project_id=LongFilter(equals=7)))
        assert spec.to_dict() == {
            "op": "=",
            "attr": "project.id",
            "val": 7,
            "join": "left",
        }

    def test_filters_follow_field_path_order(self, compiler):
        criteria = BillCriteria(
            project_id=LongFilter(equals=7), title=StringFilter(equals="x")
        )
        attrs = [s["attr"] for s in compiler.compile(criteria).to_dict()["conditions"]]
        assert attrs == ["title", "project.id"]

    def test_compiling_twice_is_idempotent(self, compiler):
        criteria = BillCriteria(
            distinct=True,
            title=StringFilter(contains="acme"),
            project_id=LongFilter(in_=(7, 8)),
        )
        assert compiler.compile(criteria).to_dict() == compiler.compile(
            criteria
        ).to_dict()
        assert criteria == BillCriteria(
            distinct=True,
            title=StringFilter(contains="acme"),
            project_id=LongFilter(in_=(7, 8)),
        )

    def test_compiled_tree_is_logged(self, compiler, caplog):
        with caplog.at_level(logging.DEBUG, logger="criteria_query.compiler"):
            compiler.compile(BillCriteria(id=LongFilter(equals=1)))
        assert "BillCriteria" in caplog.text


class TestResults:
    async def test_contains_is_case_insensitive(self, compiler):
        repo = InMemoryCriteriaRepository(
            [SimpleNamespace(id=1, title="Acme Corp"), SimpleNamespace(id=2, title="Other")]
        )
        spec = compiler.compile(BillCriteria(title=StringFilter(contains="Acme")))
        assert _ids(await repo.find_all(spec)) == [1]

    async def test_empty_in_set_matches_nothing(self, compiler, bills):
        spec = compiler.compile(BillCriteria(id=LongFilter(in_=())))
        assert await bills.find_all(spec) == []

    async def test_joined_equality_excludes_missing_relation(self, compiler, bills):
        spec = compiler.compile(BillCriteria(project_id=LongFilter(equals=7)))
        assert _ids(await bills.find_all(spec)) == [1, 4]

    async def test_specified_false_on_join_keeps_orphans(self, compiler, bills):
        spec = compiler.compile(BillCriteria(project_id=LongFilter(specified=False)))
        assert _ids(await bills.find_all(spec)) == [3]

    async def test_distinct_alone_returns_full_set(self, compiler, bills):
        spec = compiler.compile(BillCriteria(distinct=True))
        assert _ids(await bills.find_all(spec)) == [1, 2, 3, 4]

    async def test_collection_filter_with_distinct(self, compiler, members):
        criteria = ProjectMemberCriteria(
            distinct=True,
            additional_project_permissions=Filter[ProjectPermission](
                in_=(ProjectPermission.ADD_MEMBER, ProjectPermission.REMOVE_MEMBER)
            ),
        )
        assert _ids(await members.find_all(compiler.compile(criteria))) == [1, 3]

    async def test_same_results_when_compiled_twice(self, compiler, bills):
        criteria = BillCriteria(title=StringFilter(starts_with="acme"))
        first = await bills.find_all(compiler.compile(criteria))
        second = await bills.find_all(compiler.compile(criteria))
        assert _ids(first) == _ids(second) == [1, 3]


class TestCriteriaDeclaration:
    def test_filter_without_field_path_is_rejected(self):
        with pytest.raises(TypeError, match="without a field path"):

            class BrokenCriteria(Criteria):
                field_paths: ClassVar[dict[str, FieldPath]] = {"id": FieldPath("id")}

                id: LongFilter | None = None
                name: StringFilter | None = None

    def test_camel_case_criteria_fields(self):
        criteria = BillCriteria.model_validate({"projectId": {"equals": 7}})
        assert criteria.project_id == LongFilter(equals=7)


class TestInstants:
    async def test_aware_bound_compares_with_stored_naive_values(self, compiler, bills):
        spec = compiler.compile(
            CriteriaParser(BillCriteria).parse(
                {"closedTimestamp.greaterThan": "2024-02-01T00:00:00Z"}
            )
        )
        assert _ids(await bills.find_all(spec)) == [4]
