"""SQLAlchemy mappings for the entities the query services filter."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from .enums import ProjectMemberRole, ProjectPermission


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    login: Mapped[str] = mapped_column(String(50), unique=True)


class Project(Base):
    __tablename__ = "project"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255))


class Bill(Base):
    __tablename__ = "bill"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    closed_timestamp: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    final_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(21, 2), nullable=True
    )
    project_id: Mapped[int | None] = mapped_column(
        ForeignKey("project.id"), nullable=True
    )

    project: Mapped[Project | None] = relationship()


class Product(Base):
    __tablename__ = "product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    price: Mapped[Decimal | None] = mapped_column(Numeric(21, 2), nullable=True)


class ProjectMemberPermission(Base):
    """One row of a member's additional-permission collection."""

    __tablename__ = "project_member_permission"

    project_member_id: Mapped[int] = mapped_column(
        ForeignKey("project_member.id"), primary_key=True
    )
    permission: Mapped[ProjectPermission] = mapped_column(
        Enum(ProjectPermission), primary_key=True
    )


class ProjectMember(Base):
    __tablename__ = "project_member"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    role_in_project: Mapped[ProjectMemberRole | None] = mapped_column(
        Enum(ProjectMemberRole), nullable=True
    )
    added_timestamp: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("app_user.id"), nullable=True
    )
    project_id: Mapped[int | None] = mapped_column(
        ForeignKey("project.id"), nullable=True
    )

    user: Mapped[User | None] = relationship()
    project: Mapped[Project | None] = relationship()
    additional_project_permissions: Mapped[list[ProjectMemberPermission]] = (
        relationship(lazy="selectin", cascade="all, delete-orphan")
    )
