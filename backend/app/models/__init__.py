"""
Database Models Package
"""
from app.models.user import User
from app.models.region import Region, Company
from app.models.news import News, NewsLike, news_authors, news_companies, news_regions

__all__ = [
    # Identity
    "User",
    # Geography
    "Region", "Company",
    # News
    "News", "NewsLike", "news_authors", "news_companies", "news_regions",
]
