"""
Like Tracker

Toggles the (user, news) like relation and keeps News.like_count in step.
The toggle is one transaction: a keyed delete, and only when nothing was
deleted a keyed insert-if-absent. The like row is never read first.
"""
from typing import Iterable, Optional, Set

from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.models.news import News, NewsLike
from app.services.errors import InvalidFilter, NotFound

logger = structlog.get_logger()


def _insert_if_absent(dialect_name: str, user_id: str, news_id: int):
    like_table = NewsLike.__table__
    values = {"user_id": user_id, "news_id": news_id}
    if dialect_name == "postgresql":
        return postgresql.insert(like_table).values(**values).on_conflict_do_nothing(
            index_elements=["user_id", "news_id"]
        )
    if dialect_name == "sqlite":
        return sqlite.insert(like_table).values(**values).on_conflict_do_nothing(
            index_elements=["user_id", "news_id"]
        )
    if dialect_name in ("mysql", "mariadb"):
        return mysql.insert(like_table).values(**values).prefix_with("IGNORE")
    # Other stores fall back to the primary key raising on a duplicate
    return insert(like_table).values(**values)


async def toggle_like(db: AsyncSession, user_id: str, news_id: int) -> bool:
    """
    Flip the like state of a news item for a user.

    Returns:
        True when the like now exists, False when it was removed.

    Raises:
        InvalidFilter: user_id is empty.
        NotFound: no news item with news_id.
    """
    if not user_id:
        raise InvalidFilter("You need to specify user id!")

    news_exists = await db.scalar(select(News.id).where(News.id == news_id))
    if news_exists is None:
        raise NotFound(f"News {news_id} not found")

    removed = await db.execute(
        delete(NewsLike).where(NewsLike.user_id == user_id, NewsLike.news_id == news_id)
    )
    if removed.rowcount:
        await db.execute(
            update(News).where(News.id == news_id).values(like_count=News.like_count - 1)
        )
        liked = False
    else:
        dialect_name = db.get_bind().dialect.name
        added = await db.execute(_insert_if_absent(dialect_name, user_id, news_id))
        if added.rowcount:
            await db.execute(
                update(News).where(News.id == news_id).values(like_count=News.like_count + 1)
            )
        liked = True

    await db.commit()
    logger.info("Like toggled", user_id=user_id, news_id=news_id, liked=liked)
    return liked


async def liked_news_ids(db: AsyncSession, user_id: Optional[str], news_ids: Iterable[int]) -> Set[int]:
    """Subset of news_ids the user has liked; empty for anonymous callers."""
    news_ids = list(news_ids)
    if not user_id or not news_ids:
        return set()
    result = await db.execute(
        select(NewsLike.news_id).where(
            NewsLike.user_id == user_id,
            NewsLike.news_id.in_(news_ids),
        )
    )
    return set(result.scalars().all())
