from __future__ import annotations

import asyncio
from datetime import datetime

import pytest
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db.database import Base
from app.models import News, NewsLike
from app.services.errors import InvalidFilter, NotFound
from app.services.likes import liked_news_ids, toggle_like


async def _like_count(db: AsyncSession, news_id: int) -> int:
    return await db.scalar(select(News.like_count).where(News.id == news_id))


async def _like_rows(db: AsyncSession, news_id: int) -> int:
    return await db.scalar(
        select(func.count()).select_from(NewsLike).where(NewsLike.news_id == news_id)
    )


async def test_toggle_like_twice_returns_to_start(db_session: AsyncSession, add_news) -> None:
    news = await add_news(datetime(2024, 1, 7))
    assert await _like_count(db_session, news.id) == 0

    assert await toggle_like(db_session, "userA", news.id) is True
    assert await _like_count(db_session, news.id) == 1
    assert await _like_rows(db_session, news.id) == 1

    assert await toggle_like(db_session, "userA", news.id) is False
    assert await _like_count(db_session, news.id) == 0
    assert await _like_rows(db_session, news.id) == 0


async def test_counter_tracks_like_rows_across_users(db_session: AsyncSession, add_news) -> None:
    news = await add_news(datetime(2024, 1, 7))

    for user_id in ("u1", "u2", "u3", "u2"):
        await toggle_like(db_session, user_id, news.id)

    assert await _like_rows(db_session, news.id) == 2
    assert await _like_count(db_session, news.id) == 2
    assert await liked_news_ids(db_session, "u1", [news.id]) == {news.id}
    assert await liked_news_ids(db_session, "u2", [news.id]) == set()


async def test_likes_on_one_news_do_not_touch_another(db_session: AsyncSession, add_news) -> None:
    liked = await add_news(datetime(2024, 1, 7))
    untouched = await add_news(datetime(2024, 1, 8), like_count=3)

    await toggle_like(db_session, "userA", liked.id)

    assert await _like_count(db_session, untouched.id) == 3


async def test_existing_like_row_is_removed_and_counter_decremented(
    db_session: AsyncSession, add_news
) -> None:
    news = await add_news(datetime(2024, 1, 7), like_count=1)
    await db_session.execute(insert(NewsLike).values(user_id="userB", news_id=news.id))
    await db_session.commit()

    assert await toggle_like(db_session, "userB", news.id) is False
    assert await _like_count(db_session, news.id) == 0


async def test_toggle_unknown_news_raises_not_found(db_session: AsyncSession) -> None:
    with pytest.raises(NotFound):
        await toggle_like(db_session, "userA", 999)


async def test_toggle_without_user_is_rejected(db_session: AsyncSession, add_news) -> None:
    news = await add_news(datetime(2024, 1, 7))
    with pytest.raises(InvalidFilter):
        await toggle_like(db_session, "", news.id)


async def test_liked_news_ids_for_anonymous_caller_is_empty(db_session: AsyncSession, add_news) -> None:
    news = await add_news(datetime(2024, 1, 7))
    await toggle_like(db_session, "userA", news.id)
    assert await liked_news_ids(db_session, None, [news.id]) == set()
    assert await liked_news_ids(db_session, "userA", []) == set()


async def test_concurrent_toggles_keep_counter_and_rows_in_step(tmp_path) -> None:
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{(tmp_path / 'likes.db').as_posix()}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with maker() as session:
            news = News(title="Reservoir level bulletin", body="Level readings. " * 20, post_date=datetime(2024, 1, 7))
            session.add(news)
            await session.commit()
            news_id = news.id

        async def toggle_in_own_session() -> bool:
            async with maker() as session:
                return await toggle_like(session, "userA", news_id)

        results = await asyncio.gather(*(toggle_in_own_session() for _ in range(6)))

        async with maker() as session:
            rows = await _like_rows(session, news_id)
            count = await _like_count(session, news_id)

        assert rows <= 1
        assert count == rows
        assert results.count(True) - results.count(False) == rows
    finally:
        await engine.dispose()
