"""
Region Activity Aggregator and Regional Digest Builder

Region counts are computed with a store-side GROUP BY over the region links
(direct tags plus company regions); only the top rows are returned.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.config import settings
from app.models.news import News
from app.models.region import Region
from app.schemas import RegionDigestResponse
from app.services.errors import InvalidFilter
from app.services.filters import as_naive, region_links, validate_date_range
from app.services.formatting import NewsFormatter
from app.services.likes import liked_news_ids

logger = structlog.get_logger()


@dataclass
class RegionActivity:
    region: Region
    count: int
    rank: int


async def active_regions(
    db: AsyncSession,
    top_n: int,
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
) -> List[RegionActivity]:
    """
    Rank regions by how many news items they carry.

    Args:
        top_n: Number of regions to return, 0..MAX_ACTIVE_REGIONS
        from_date: Inclusive window start; requires to_date
        to_date: Inclusive window end; requires from_date

    Returns:
        Regions ordered by count descending then region id ascending.
        Regions without matching news are never included.
    """
    limit = settings.max_active_regions
    if top_n is None or top_n < 0 or top_n > limit:
        raise InvalidFilter(f"countOfRegions must be between 0 and {limit}")
    validate_date_range(from_date, to_date)

    if top_n == 0:
        return []

    links = region_links()
    news_count = func.count(func.distinct(links.c.news_id)).label("news_count")

    query = select(Region, news_count).join(links, links.c.region_id == Region.id)
    if from_date is not None:
        query = query.join(News, News.id == links.c.news_id).where(
            News.post_date.between(as_naive(from_date), as_naive(to_date))
        )
    query = (
        query.group_by(Region.id)
        .order_by(news_count.desc(), Region.id.asc())
        .limit(top_n)
    )

    result = await db.execute(query)
    ranking = [
        RegionActivity(region=region, count=count, rank=rank)
        for rank, (region, count) in enumerate(result.all(), start=1)
    ]
    logger.info(
        "Active regions computed",
        requested=top_n,
        returned=len(ranking),
        windowed=from_date is not None,
    )
    return ranking


async def region_digest(
    db: AsyncSession,
    regions_count: int,
    news_per_region: int,
    user_id: Optional[str] = None,
) -> List[RegionDigestResponse]:
    """
    Build the front page: for each of the most active regions (all time),
    its newest news ordered by post_date then id, both descending.
    """
    if regions_count is None or news_per_region is None or regions_count < 0 or news_per_region < 0:
        raise InvalidFilter("regionsCount and newsCount must be non-negative")

    top = await active_regions(db, min(regions_count, settings.max_active_regions))

    per_region = []
    for activity in top:
        rows: List[News] = []
        if news_per_region:
            links = region_links()
            query = (
                select(News)
                .where(News.id.in_(
                    select(links.c.news_id).where(links.c.region_id == activity.region.id)
                ))
                .order_by(News.post_date.desc().nulls_last(), News.id.desc())
                .limit(news_per_region)
            )
            result = await db.execute(query)
            rows = list(result.scalars().all())
        per_region.append((activity.region, rows))

    liked = await liked_news_ids(
        db, user_id, {news.id for _, rows in per_region for news in rows}
    )
    return [
        NewsFormatter.format_digest(region, NewsFormatter.format_news_list(rows, liked))
        for region, rows in per_region
    ]
