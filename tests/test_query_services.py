"""Tests for the entity query services over both storage layers."""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from criteria_query import (
    BigDecimalFilter,
    LongFilter,
    PageRequest,
    QueryServiceConfig,
    StringFilter,
)
from criteria_query.domain import (
    Bill,
    BillCriteria,
    BillDTO,
    Product,
    ProductCriteria,
    ProductDTO,
    ProjectMember,
    ProjectMemberCriteria,
    ProjectMemberDTO,
    ProjectMemberRole,
    ProjectPermission,
)
from criteria_query.memory import InMemoryCriteriaRepository, InMemorySearchRepository
from criteria_query.persistence import SQLAlchemyCriteriaRepository
from criteria_query.services import (
    BillQueryService,
    ProductQueryService,
    ProjectMemberQueryService,
)


@pytest.fixture
def bill_service(seeded) -> BillQueryService:
    return BillQueryService(SQLAlchemyCriteriaRepository(Bill, seeded))


@pytest.fixture
def member_service(seeded) -> ProjectMemberQueryService:
    return ProjectMemberQueryService(SQLAlchemyCriteriaRepository(ProjectMember, seeded))


# ---------------------------------------------------------------------------
# Bill
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_find_by_criteria_returns_dtos(bill_service):
    result = await bill_service.find_by_criteria(
        BillCriteria(title=StringFilter(contains="corp"))
    )
    assert result == [
        BillDTO(
            id=1,
            title="Acme Corp",
            closed_timestamp=result[0].closed_timestamp,
            final_amount=Decimal("100.00"),
            project_id=7,
        )
    ]


@pytest.mark.asyncio
async def test_find_by_none_criteria_returns_everything(bill_service):
    result = await bill_service.find_by_criteria(None)
    assert sorted(dto.id for dto in result) == [1, 2, 3, 4]


@pytest.mark.asyncio
async def test_find_page_applies_default_sort(seeded):
    service = BillQueryService(
        SQLAlchemyCriteriaRepository(Bill, seeded),
        config=QueryServiceConfig(default_sort=("-id",)),
    )
    page = await service.find_page_by_criteria(BillCriteria(), PageRequest(size=3))
    assert [dto.id for dto in page.content] == [4, 3, 2]
    assert page.total_elements == 4
    assert all(isinstance(dto, BillDTO) for dto in page.content)


@pytest.mark.asyncio
async def test_find_page_keeps_requested_sort(bill_service):
    page = await bill_service.find_page_by_criteria(
        BillCriteria(project_id=LongFilter(equals=7)),
        PageRequest(sort=("-id",)),
    )
    assert [dto.id for dto in page.content] == [4, 1]


@pytest.mark.asyncio
async def test_count_by_criteria(bill_service):
    assert await bill_service.count_by_criteria(BillCriteria(distinct=True)) == 4
    assert (
        await bill_service.count_by_criteria(
            BillCriteria(final_amount=BigDecimalFilter(less_than_or_equal=Decimal("25.50")))
        )
        == 2
    )


@pytest.mark.asyncio
async def test_calls_are_logged(bill_service, caplog):
    with caplog.at_level(logging.DEBUG, logger="criteria_query.services"):
        await bill_service.count_by_criteria(BillCriteria())
    assert "count by criteria" in caplog.text


# ---------------------------------------------------------------------------
# Project members
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_member_dto_unwraps_permissions(member_service):
    result = await member_service.find_by_criteria(
        ProjectMemberCriteria(id=LongFilter(equals=1))
    )
    assert result == [
        ProjectMemberDTO(
            id=1,
            role_in_project=ProjectMemberRole.PROJECT_ADMIN,
            added_timestamp=result[0].added_timestamp,
            user_id=1,
            project_id=7,
            additional_project_permissions=[
                ProjectPermission.ADD_MEMBER,
                ProjectPermission.REMOVE_MEMBER,
            ],
        )
    ]


def test_admin_criteria():
    criteria = ProjectMemberQueryService.admin_criteria("alice")
    assert criteria.distinct is True
    assert criteria.user_login == StringFilter(equals="alice")
    assert criteria.additional_project_permissions is not None
    assert criteria.additional_project_permissions.in_ == (
        ProjectPermission.ADD_MEMBER,
    )
    assert criteria.role_in_project is not None
    assert criteria.role_in_project.in_ == (ProjectMemberRole.PROJECT_ADMIN,)


@pytest.mark.asyncio
async def test_find_by_admin_user_login(member_service):
    members = await member_service.find_by_admin_user_login("alice")
    assert [m.id for m in members] == [1]
    assert all(isinstance(m, ProjectMember) for m in members)


@pytest.mark.asyncio
async def test_find_by_admin_user_login_requires_admin_role(member_service):
    # bob holds ADD_MEMBER but is not a project admin.
    assert await member_service.find_by_admin_user_login("bob") == []
    assert await member_service.find_by_admin_user_login("nobody") == []


@pytest.mark.asyncio
async def test_find_by_admin_user_login_in_memory(graph):
    service = ProjectMemberQueryService(InMemoryCriteriaRepository(graph["members"]))
    members = await service.find_by_admin_user_login("alice")
    assert [m.id for m in members] == [1]


# ---------------------------------------------------------------------------
# Products and search
# ---------------------------------------------------------------------------


@pytest.fixture
async def product_service(graph) -> ProductQueryService:
    search = InMemorySearchRepository(["name"])
    for product in graph["products"]:
        await search.index(product)
    return ProductQueryService(
        InMemoryCriteriaRepository(graph["products"]), search_repository=search
    )


@pytest.mark.asyncio
async def test_product_criteria_in_memory(product_service):
    result = await product_service.find_by_criteria(
        ProductCriteria(name=StringFilter(starts_with="widget"))
    )
    assert [dto.id for dto in result] == [1, 3]
    assert all(isinstance(dto, ProductDTO) for dto in result)


@pytest.mark.asyncio
async def test_search_bypasses_criteria(product_service):
    page = await product_service.search("widget", PageRequest(size=1))
    assert [dto.name for dto in page.content] == ["Widget"]
    assert page.total_elements == 2


@pytest.mark.asyncio
async def test_search_without_search_repository(graph):
    service = ProductQueryService(InMemoryCriteriaRepository(graph["products"]))
    with pytest.raises(RuntimeError):
        await service.search("widget", PageRequest())


@pytest.mark.asyncio
async def test_search_result_mapping(graph):
    search = InMemorySearchRepository(["title"])
    for bill in graph["bills"]:
        await search.index(bill)
    service = BillQueryService(
        InMemoryCriteriaRepository(graph["bills"]), search_repository=search
    )
    page = await service.search("acme", PageRequest())
    assert [dto.id for dto in page.content] == [1, 3]
    assert isinstance(page.content[0], BillDTO)
