"""
News Output Formatting

Pure mapping from ORM rows and per-user like state to the API schemas.
"""
from typing import Iterable, List, Set

from app.models.news import News
from app.models.region import Region
from app.schemas import (
    ActiveRegionResponse,
    AuthorResponse,
    CompanyResponse,
    FormattedNews,
    FormattedNewsPage,
    RegionDigestResponse,
    RegionResponse,
)


class NewsFormatter:
    """Format news entities for API responses."""

    @classmethod
    def format_news(cls, news: News, is_liked: bool = False) -> FormattedNews:
        return FormattedNews(
            id=news.id,
            title=news.title,
            body=news.body,
            post_date=news.post_date,
            update_date=news.update_date,
            source_url=news.source_url,
            like_count=news.like_count or 0,
            is_liked_by_user=is_liked,
            authors=[AuthorResponse.model_validate(author) for author in news.authors],
            companies=[CompanyResponse.model_validate(company) for company in news.companies],
            regions=[RegionResponse.model_validate(region) for region in news.regions],
        )

    @classmethod
    def format_news_list(cls, items: Iterable[News], liked_ids: Set[int]) -> List[FormattedNews]:
        return [cls.format_news(news, news.id in liked_ids) for news in items]

    @classmethod
    def format_page(cls, items: List[FormattedNews], remaining_count: int, is_it_end: bool) -> FormattedNewsPage:
        """Attach pagination metadata to a page of formatted news."""
        return FormattedNewsPage(
            remaining_rows_count=remaining_count,
            selected_news=items,
            is_it_end=is_it_end,
        )

    @classmethod
    def format_active_region(cls, region: Region, news_count: int, rank: int) -> ActiveRegionResponse:
        return ActiveRegionResponse(
            region=RegionResponse.model_validate(region),
            news_count=news_count,
            rank=rank,
        )

    @classmethod
    def format_digest(cls, region: Region, news: List[FormattedNews]) -> RegionDigestResponse:
        return RegionDigestResponse(region=RegionResponse.model_validate(region), news=news)
