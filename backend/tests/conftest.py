from __future__ import annotations

import itertools
from datetime import datetime
from typing import AsyncIterator, Iterable, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.database import Base, get_db
from app.models import Company, News, Region, User


@pytest.fixture()
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture()
async def db_session(session_maker: async_sessionmaker) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture()
async def client(session_maker: async_sessionmaker) -> AsyncIterator[AsyncClient]:
    from app.main import app

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def add_region(db_session: AsyncSession):
    async def _add(name: str, region_id: Optional[int] = None) -> Region:
        region = Region(id=region_id, name=name)
        db_session.add(region)
        await db_session.flush()
        return region

    return _add


@pytest.fixture()
def add_company(db_session: AsyncSession):
    async def _add(name: str, region: Region) -> Company:
        company = Company(name=name, description=f"{name} plant", region_id=region.id)
        db_session.add(company)
        await db_session.flush()
        return company

    return _add


@pytest.fixture()
def add_author(db_session: AsyncSession):
    async def _add(user_id: str) -> User:
        author = User(id=user_id, user_name=f"{user_id}.name")
        db_session.add(author)
        await db_session.flush()
        return author

    return _add


@pytest.fixture()
def add_news(db_session: AsyncSession):
    numbers = itertools.count(1)

    async def _add(
        post_date: Optional[datetime],
        regions: Iterable[Region] = (),
        companies: Iterable[Company] = (),
        authors: Iterable[User] = (),
        like_count: int = 0,
    ) -> News:
        number = next(numbers)
        news = News(
            title=f"Monitoring bulletin {number}",
            body=f"Bulletin {number} body. " * 20,
            post_date=post_date,
            like_count=like_count,
        )
        news.regions.extend(regions)
        news.companies.extend(companies)
        news.authors.extend(authors)
        db_session.add(news)
        await db_session.flush()
        return news

    return _add
