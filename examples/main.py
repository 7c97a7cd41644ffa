from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
import logging
from fastapi import FastAPI, Depends
import sqlalchemy
from blt_query import ResourceQuery
from blt_query.config import settings
from fastapi_pagination import Page, add_pagination
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy import String, ForeignKey, select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import Mapped, mapped_column, relationship, declarative_base
import uvicorn

from examples.schemas import IssueResponse, IssueStatus, Severity

logging.basicConfig(level=settings.LOG_LEVEL)

# ───── App & DB Setup ───────────────────────────

DATABASE_URL = "sqlite+aiosqlite:///./issues.db"

engine = create_async_engine(DATABASE_URL, echo=True)
SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)
Base = declarative_base()


async def get_db():
    async with SessionLocal() as session:
        yield session


# ───── Models ────────────────────────────────────

class Reporter(Base):
    __tablename__ = "reporters"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)

    issues: Mapped[list["Issue"]] = relationship("Issue", back_populates="reporter")


class Issue(Base):
    __tablename__ = "issues"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String, index=True)
    severity: Mapped[Severity] = mapped_column(sqlalchemy.Enum(Severity), nullable=False)
    status: Mapped[IssueStatus] = mapped_column(
        sqlalchemy.Enum(IssueStatus),
        default=IssueStatus.OPEN,
        nullable=False
    )
    votes: Mapped[int] = mapped_column(default=0)
    reporter_id: Mapped[int] = mapped_column(ForeignKey("reporters.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(timezone.utc))

    reporter: Mapped["Reporter"] = relationship("Reporter", back_populates="issues", lazy="selectin")


# ───── Lifespan / Seed Data ─────────────────────

@asynccontextmanager
async def lifespan(_: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as session:
        result = await session.execute(select(Reporter))
        if not result.scalars().first():
            alice = Reporter(name="Alice", email="alice@example.com")
            bob = Reporter(name="Bob", email="bob@example.com")
            session.add_all([alice, bob])
            await session.commit()

            now = datetime.now(timezone.utc)
            session.add_all([
                Issue(title="Login button misaligned", severity=Severity.LOW,
                      status=IssueStatus.OPEN, votes=3, reporter=alice,
                      created_at=now - timedelta(days=4)),
                Issue(title="XSS in search box", severity=Severity.HIGH,
                      status=IssueStatus.OPEN, votes=12, reporter=bob,
                      created_at=now - timedelta(days=3)),
                Issue(title="Broken link in footer", severity=Severity.LOW,
                      status=IssueStatus.CLOSED, votes=1, reporter=alice,
                      created_at=now - timedelta(days=2)),
                Issue(title="Crash on empty upload", severity=Severity.HIGH,
                      status=IssueStatus.CLOSED, votes=7, reporter=bob,
                      created_at=now - timedelta(days=1)),
                Issue(title="Slow dashboard", severity=Severity.MEDIUM,
                      status=IssueStatus.OPEN, votes=5, reporter=None,
                      created_at=now),
            ])
            await session.commit()

    yield

# ───── FastAPI App ───────────────────────────────

app = FastAPI(lifespan=lifespan)


@app.get("/issues", response_model=list[IssueResponse])
async def get_issues(query=ResourceQuery(Issue), session: AsyncSession = Depends(get_db)):
    """
    Examples:

    GET /issues?severity=high&status=open
    GET /issues?sort=-created_at&limit=2
    GET /issues?reporter.email=alice@example.com&sort=votes
    GET /issues?limit=abc   (limit is ignored)
    """
    result = await session.execute(query)
    return result.scalars().all()


@app.get("/issues/paginated", response_model=Page[IssueResponse])
async def get_issues_paginated(query=ResourceQuery(Issue, ignore={"page", "size"}), session: AsyncSession = Depends(get_db)):
    return await paginate(session, query)


add_pagination(app)

# ───── Run Server ────────────────────────────────

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
