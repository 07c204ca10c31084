"""Shared fixtures: an in-memory SQLite database and a fixed data set."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from criteria_query.domain import (
    Base,
    Bill,
    Product,
    Project,
    ProjectMember,
    ProjectMemberPermission,
    ProjectMemberRole,
    ProjectPermission,
    User,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# ---------------------------------------------------------------------------
# Data set
# ---------------------------------------------------------------------------
#
# Bills:   1 "Acme Corp"    project 7   100.00   closed 2024-01-10
#          2 "Other"        project 8    25.50   open
#          3 "Acme Refund"  no project   10.00   open
#          4 "Misc"         project 7    no amount, closed 2024-03-01
#
# Members: 1 alice  admin   project 7  [ADD_MEMBER, REMOVE_MEMBER]
#          2 alice  admin   project 8  [ADD_BILL]
#          3 bob    member  project 7  [ADD_MEMBER, ADD_BILL]
#          4 alice  guest   project 7  []


def _perms(*permissions: ProjectPermission) -> list[ProjectMemberPermission]:
    return [ProjectMemberPermission(permission=p) for p in permissions]


def make_graph() -> dict[str, list]:
    """Build a fresh, unsaved object graph for the data set above."""
    apollo = Project(id=7, name="Apollo")
    gemini = Project(id=8, name="Gemini")
    alice = User(id=1, login="alice")
    bob = User(id=2, login="bob")

    bills = [
        Bill(
            id=1,
            title="Acme Corp",
            project_id=7,
            project=apollo,
            final_amount=Decimal("100.00"),
            closed_timestamp=datetime(2024, 1, 10, 12, 0),
        ),
        Bill(
            id=2,
            title="Other",
            project_id=8,
            project=gemini,
            final_amount=Decimal("25.50"),
        ),
        Bill(id=3, title="Acme Refund", final_amount=Decimal("10.00")),
        Bill(
            id=4,
            title="Misc",
            project_id=7,
            project=apollo,
            closed_timestamp=datetime(2024, 3, 1, 9, 30),
        ),
    ]
    members = [
        ProjectMember(
            id=1,
            role_in_project=ProjectMemberRole.PROJECT_ADMIN,
            added_timestamp=datetime(2023, 6, 1),
            user_id=1,
            user=alice,
            project_id=7,
            project=apollo,
            additional_project_permissions=_perms(
                ProjectPermission.ADD_MEMBER, ProjectPermission.REMOVE_MEMBER
            ),
        ),
        ProjectMember(
            id=2,
            role_in_project=ProjectMemberRole.PROJECT_ADMIN,
            added_timestamp=datetime(2023, 7, 1),
            user_id=1,
            user=alice,
            project_id=8,
            project=gemini,
            additional_project_permissions=_perms(ProjectPermission.ADD_BILL),
        ),
        ProjectMember(
            id=3,
            role_in_project=ProjectMemberRole.PROJECT_MEMBER,
            added_timestamp=datetime(2023, 8, 1),
            user_id=2,
            user=bob,
            project_id=7,
            project=apollo,
            additional_project_permissions=_perms(
                ProjectPermission.ADD_MEMBER, ProjectPermission.ADD_BILL
            ),
        ),
        ProjectMember(
            id=4,
            role_in_project=ProjectMemberRole.PROJECT_GUEST,
            user_id=1,
            user=alice,
            project_id=7,
            project=apollo,
            additional_project_permissions=[],
        ),
    ]
    products = [
        Product(id=1, name="Widget", price=Decimal("9.99")),
        Product(id=2, name="Gadget", price=Decimal("19.99")),
        Product(id=3, name="Widget Pro", price=None),
    ]
    return {
        "projects": [apollo, gemini],
        "users": [alice, bob],
        "bills": bills,
        "members": members,
        "products": products,
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def graph() -> dict[str, list]:
    return make_graph()


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as sess:
        yield sess


@pytest.fixture
async def seeded(session: AsyncSession, graph) -> AsyncSession:
    """Session over a database holding the data set above."""
    for key in ("projects", "users", "bills", "members", "products"):
        session.add_all(graph[key])
    await session.commit()
    return session
