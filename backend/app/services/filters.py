"""
Filter Normalizer

Turns raw search parameters into a FilterCriteria value and builds the
composable predicate spec used by both the count and the page queries.
Each dimension is an OR over its ids; dimensions combine with AND.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Callable, Iterable, List, Optional, Tuple

from sqlalchemy import Select, select, union
from sqlalchemy.sql.elements import ColumnElement
import structlog

from app.config import settings
from app.models.news import News, news_authors, news_companies, news_regions
from app.models.region import Company
from app.services.errors import InvalidFilter

logger = structlog.get_logger()

DAY_START = time(0, 0, 0)
DAY_END = time(23, 59, 59)


@dataclass(frozen=True)
class FilterCriteria:
    """Canonical, request-scoped description of a news search."""
    page: int = 0
    count: int = 10
    by_relevance: bool = False
    newer_to_older: bool = True
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None
    region_ids: Tuple[int, ...] = ()
    author_ids: Tuple[str, ...] = ()
    company_ids: Tuple[int, ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.count


def validate_date_range(from_date: Optional[datetime], to_date: Optional[datetime]) -> None:
    """Reject half-open ranges and ranges that run backwards."""
    if (from_date is None) != (to_date is None):
        raise InvalidFilter("You need to specify two date parameters or none of them")
    if from_date is not None and as_naive(from_date) > as_naive(to_date):
        raise InvalidFilter("fromDate must be less than toDate")


def as_naive(value: datetime) -> datetime:
    """Aware datetimes are compared and stored as naive UTC."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, DAY_START)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _unique(values: Iterable) -> tuple:
    seen = {}
    for value in values:
        if value is not None:
            seen.setdefault(value, None)
    return tuple(seen)


def _day_bounds(from_value: date, to_value: date) -> Tuple[datetime, datetime]:
    if isinstance(from_value, datetime):
        from_value = from_value.date()
    if isinstance(to_value, datetime):
        to_value = to_value.date()
    return datetime.combine(from_value, DAY_START), datetime.combine(to_value, DAY_END)


def normalize_filter(
    page: Optional[int] = None,
    count: Optional[int] = None,
    by_relevance: Optional[bool] = None,
    newer_to_older: Optional[bool] = None,
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
    region_ids: Optional[Iterable[int]] = None,
    author_ids: Optional[Iterable[str]] = None,
    company_ids: Optional[Iterable[int]] = None,
) -> FilterCriteria:
    """
    Validate raw search parameters and return the canonical criteria.

    Raises:
        InvalidFilter: negative paging values, a half-specified date range,
            or fromDate later than toDate.
    """
    page = 0 if page is None else page
    count = settings.default_page_size if count is None else count
    if page < 0 or count < 0:
        raise InvalidFilter("page and count must be non-negative")

    validate_date_range(from_date, to_date)
    if from_date is not None:
        from_date, to_date = _day_bounds(as_naive(from_date), as_naive(to_date))

    authors = _unique(author for author in (author_ids or ()) if author)

    criteria = FilterCriteria(
        page=page,
        count=count,
        by_relevance=bool(by_relevance),
        newer_to_older=True if newer_to_older is None else newer_to_older,
        from_date=from_date,
        to_date=to_date,
        region_ids=_unique(region_ids or ()),
        author_ids=authors,
        company_ids=_unique(company_ids or ()),
    )
    logger.debug("Filter normalized", criteria=criteria)
    return criteria


def region_links():
    """
    (news_id, region_id) pairs, from direct region tags and from the region
    of every tagged company. Duplicate pairs are collapsed.
    """
    direct = select(
        news_regions.c.news_id.label("news_id"),
        news_regions.c.region_id.label("region_id"),
    )
    via_company = select(
        news_companies.c.news_id.label("news_id"),
        Company.region_id.label("region_id"),
    ).join(Company, Company.id == news_companies.c.company_id)
    return union(direct, via_company).subquery("region_links")


def _in_regions(ids: tuple) -> ColumnElement:
    links = region_links()
    return News.id.in_(select(links.c.news_id).where(links.c.region_id.in_(ids)))


def _by_authors(ids: tuple) -> ColumnElement:
    return News.id.in_(
        select(news_authors.c.news_id).where(news_authors.c.user_id.in_(ids))
    )


def _by_companies(ids: tuple) -> ColumnElement:
    return News.id.in_(
        select(news_companies.c.news_id).where(news_companies.c.company_id.in_(ids))
    )


@dataclass(frozen=True)
class DimensionFilter:
    """OR over the listed ids of one dimension; no ids means no constraint."""
    name: str
    ids: tuple
    predicate: Callable[[tuple], ColumnElement]

    def clause(self) -> Optional[ColumnElement]:
        if not self.ids:
            return None
        return self.predicate(self.ids)


@dataclass(frozen=True)
class NewsFilterSpec:
    """AND across the date window and every constrained dimension."""
    dimensions: Tuple[DimensionFilter, ...] = ()
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None

    def clauses(self) -> List[ColumnElement]:
        clauses = []
        if self.from_date is not None and self.to_date is not None:
            clauses.append(News.post_date.between(self.from_date, self.to_date))
        for dimension in self.dimensions:
            clause = dimension.clause()
            if clause is not None:
                clauses.append(clause)
        return clauses

    def apply(self, query: Select) -> Select:
        clauses = self.clauses()
        if clauses:
            query = query.where(*clauses)
        return query


def build_filter_spec(criteria: FilterCriteria) -> NewsFilterSpec:
    return NewsFilterSpec(
        dimensions=(
            DimensionFilter("regions", criteria.region_ids, _in_regions),
            DimensionFilter("authors", criteria.author_ids, _by_authors),
            DimensionFilter("companies", criteria.company_ids, _by_companies),
        ),
        from_date=criteria.from_date,
        to_date=criteria.to_date,
    )
