"""
News API Routes

Endpoint names and query parameters follow the EcoMonitor News API.
"""
from fastapi import APIRouter, Query, Response
from typing import List, Optional
from datetime import datetime

from app.api.dependencies import CallerId, DbSession
from app.schemas import APIResponse
from app.services import (
    NewsFormatter,
    Unauthorized,
    active_regions,
    get_by_id,
    normalize_filter,
    region_digest,
    search,
    toggle_like,
)

router = APIRouter()


@router.get("/GetNewsByFilter", response_model=APIResponse)
async def get_news_by_filter(
    db: DbSession,
    page: Optional[int] = Query(None, ge=0),
    count: Optional[int] = Query(None, ge=0),
    by_relevance: Optional[bool] = Query(None, alias="byRelevance"),
    newer_to_older: Optional[bool] = Query(None, alias="newerToOlder"),
    from_date: Optional[datetime] = Query(None, alias="fromDate"),
    to_date: Optional[datetime] = Query(None, alias="toDate"),
    region_ids: Optional[List[int]] = Query(None),
    author_ids: Optional[List[str]] = Query(None),
    company_ids: Optional[List[int]] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """
    Search news by date window, regions, authors and companies.

    Returns a page of news with remaining_rows_count and is_it_end.
    """
    criteria = normalize_filter(
        page=page,
        count=count,
        by_relevance=by_relevance,
        newer_to_older=newer_to_older,
        from_date=from_date,
        to_date=to_date,
        region_ids=region_ids,
        author_ids=author_ids,
        company_ids=company_ids,
    )
    result = await search(db, criteria, user_id)
    return APIResponse(
        result=NewsFormatter.format_page(result.items, result.remaining_count, result.is_it_end)
    )


@router.post("/LikeNews", response_model=APIResponse)
async def like_news(
    db: DbSession,
    caller_id: CallerId,
    user_id: str = Query(..., alias="userId"),
    news_id: int = Query(..., alias="newsId", ge=0),
):
    """
    Toggle the caller's like on a news item.

    The result is the new like state.
    """
    if caller_id != user_id:
        raise Unauthorized("Caller does not match userId")

    liked = await toggle_like(db, user_id, news_id)
    return APIResponse(result=liked)


@router.get("/GetRegionNews", response_model=APIResponse)
async def get_region_news(
    db: DbSession,
    regions_count: int = Query(..., alias="regionsCount"),
    news_count: int = Query(..., alias="newsCount"),
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """Latest news for each of the most active regions."""
    digest = await region_digest(db, regions_count, news_count, user_id)
    return APIResponse(result=digest)


@router.get("/GetNewsById", response_model=APIResponse)
async def get_news_by_id(
    db: DbSession,
    news_id: int = Query(..., alias="newsId"),
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """Single news item with the caller's like state."""
    news = await get_by_id(db, news_id, user_id)
    return APIResponse(result=news)


@router.get(
    "/GetNewsActiveRegions",
    response_model=APIResponse,
    responses={204: {"description": "No region has news in the window"}},
)
async def get_news_active_regions(
    db: DbSession,
    count_of_regions: int = Query(..., alias="countOfRegions"),
    from_date: Optional[datetime] = Query(None, alias="fromDate"),
    to_date: Optional[datetime] = Query(None, alias="toDate"),
):
    """
    Regions ranked by news count, optionally within a date window.
    """
    ranking = await active_regions(db, count_of_regions, from_date, to_date)
    if not ranking:
        return Response(status_code=204)

    return APIResponse(
        result=[
            NewsFormatter.format_active_region(activity.region, activity.count, activity.rank)
            for activity in ranking
        ]
    )
