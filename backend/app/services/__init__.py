"""
News services: filtering, search, likes and regional analytics.
"""
from app.services.errors import NewsServiceError, InvalidFilter, NotFound, Unauthorized
from app.services.filters import FilterCriteria, NewsFilterSpec, build_filter_spec, normalize_filter
from app.services.news_query import SearchPage, search, get_by_id
from app.services.likes import toggle_like, liked_news_ids
from app.services.regions import RegionActivity, active_regions, region_digest
from app.services.formatting import NewsFormatter

__all__ = [
    # Errors
    "NewsServiceError", "InvalidFilter", "NotFound", "Unauthorized",
    # Filtering
    "FilterCriteria", "NewsFilterSpec", "build_filter_spec", "normalize_filter",
    # Queries
    "SearchPage", "search", "get_by_id",
    # Likes
    "toggle_like", "liked_news_ids",
    # Regions
    "RegionActivity", "active_regions", "region_digest",
    # Formatting
    "NewsFormatter",
]
