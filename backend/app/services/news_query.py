"""
News Query Engine

Resolves FilterCriteria into one page of formatted news plus pagination
accounting. The total is a COUNT over the same predicate as the page fetch,
so the full result set is never materialized.
"""
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.models.news import News
from app.schemas import FormattedNews
from app.services.errors import NotFound
from app.services.filters import FilterCriteria, build_filter_spec
from app.services.formatting import NewsFormatter
from app.services.likes import liked_news_ids

logger = structlog.get_logger()


@dataclass
class SearchPage:
    items: List[FormattedNews]
    remaining_count: int
    is_it_end: bool
    total_matches: int


def news_ordering(criteria: FilterCriteria) -> list:
    """
    Relevance ranks by like_count, otherwise by post_date; newer_to_older
    selects descending. Undated news sorts as the oldest. id ascending
    breaks every tie.
    """
    if criteria.by_relevance:
        primary = News.like_count.desc() if criteria.newer_to_older else News.like_count.asc()
    elif criteria.newer_to_older:
        primary = News.post_date.desc().nulls_last()
    else:
        primary = News.post_date.asc().nulls_first()
    return [primary, News.id.asc()]


async def search(db: AsyncSession, criteria: FilterCriteria, user_id: Optional[str] = None) -> SearchPage:
    """
    Fetch one page of news matching the criteria.

    A page size of zero returns no items while still reporting every match
    as remaining.
    """
    spec = build_filter_spec(criteria)

    total = await db.scalar(spec.apply(select(func.count(News.id))))
    total = total or 0

    rows: List[News] = []
    if total and criteria.count:
        query = (
            spec.apply(select(News))
            .order_by(*news_ordering(criteria))
            .offset(criteria.offset)
            .limit(criteria.count)
        )
        result = await db.execute(query)
        rows = list(result.scalars().all())

    liked = await liked_news_ids(db, user_id, [news.id for news in rows])
    items = NewsFormatter.format_news_list(rows, liked)

    remaining = max(0, total - (criteria.offset + len(items)))
    logger.info(
        "News search completed",
        total_matches=total,
        returned=len(items),
        remaining=remaining,
        page=criteria.page,
        count=criteria.count,
    )
    return SearchPage(
        items=items,
        remaining_count=remaining,
        is_it_end=remaining <= 0,
        total_matches=total,
    )


async def get_by_id(db: AsyncSession, news_id: int, user_id: Optional[str] = None) -> FormattedNews:
    """Get a single formatted news item, with the caller's like state."""
    result = await db.execute(select(News).where(News.id == news_id))
    news = result.scalar_one_or_none()

    if news is None:
        raise NotFound(f"News {news_id} not found")

    liked = await liked_news_ids(db, user_id, [news.id])
    return NewsFormatter.format_news(news, news.id in liked)
