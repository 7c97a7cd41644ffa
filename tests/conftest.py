"""Shared fixtures for blt_query tests."""

from __future__ import annotations

import enum
from typing import Optional

import pytest
import sqlalchemy
from sqlalchemy import ForeignKey, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, relationship
from sqlalchemy.pool import StaticPool


class Severity(str, enum.Enum):
    LOW = "low"
    HIGH = "high"


class Base(DeclarativeBase):
    pass


class Reporter(Base):
    __tablename__ = "reporters"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String)

    issues: Mapped[list["Issue"]] = relationship(back_populates="reporter")


class Issue(Base):
    __tablename__ = "issues"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String)
    severity: Mapped[Severity] = mapped_column(sqlalchemy.Enum(Severity))
    status: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    votes: Mapped[int] = mapped_column(default=0)
    is_public: Mapped[bool] = mapped_column(default=True)
    reporter_id: Mapped[Optional[int]] = mapped_column(ForeignKey("reporters.id"), nullable=True)

    reporter: Mapped[Optional[Reporter]] = relationship(back_populates="issues")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        alice = Reporter(id=1, email="alice@example.com")
        bob = Reporter(id=2, email="bob@example.com")
        session.add_all([alice, bob])
        session.add_all([
            Issue(id=1, title="a", severity=Severity.LOW, status="open", votes=3, is_public=True, reporter=alice),
            Issue(id=2, title="b", severity=Severity.HIGH, status="open", votes=12, is_public=False, reporter=bob),
            Issue(id=3, title="c", severity=Severity.LOW, status="closed", votes=1, is_public=True, reporter=alice),
            Issue(id=4, title="d", severity=Severity.HIGH, status="closed", votes=7, is_public=True, reporter=bob),
            Issue(id=5, title="e", severity=Severity.HIGH, status=None, votes=5, is_public=True, reporter=None),
        ])
        session.commit()
        yield session
