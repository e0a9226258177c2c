"""
News Database Models
"""
from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey, Table
from sqlalchemy.orm import relationship
from datetime import datetime

from app.db.database import Base


news_authors = Table(
    "news_authors",
    Base.metadata,
    Column("news_id", Integer, ForeignKey("news.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(450), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True),
)

news_companies = Table(
    "news_companies",
    Base.metadata,
    Column("news_id", Integer, ForeignKey("news.id", ondelete="CASCADE"), primary_key=True),
    Column("company_id", Integer, ForeignKey("companies.id", ondelete="CASCADE"), primary_key=True, index=True),
)

news_regions = Table(
    "news_regions",
    Base.metadata,
    Column("news_id", Integer, ForeignKey("news.id", ondelete="CASCADE"), primary_key=True),
    Column("region_id", Integer, ForeignKey("regions.id", ondelete="CASCADE"), primary_key=True, index=True),
)


class News(Base):
    """
    News article scoped to regions, companies and authors.

    like_count mirrors the number of NewsLike rows and is only changed by the
    like tracker.
    """

    __tablename__ = "news"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, unique=True)
    body = Column(Text, nullable=False)
    post_date = Column(DateTime, nullable=True, index=True)
    update_date = Column(DateTime, nullable=True)
    source_url = Column(String(2048), nullable=True)
    like_count = Column(Integer, nullable=False, default=0, server_default="0", index=True)

    # Relationships
    authors = relationship("User", secondary=news_authors, lazy="selectin", order_by="User.user_name")
    companies = relationship("Company", secondary=news_companies, lazy="selectin", order_by="Company.id")
    regions = relationship("Region", secondary=news_regions, lazy="selectin", order_by="Region.id")

    def __repr__(self):
        return f"<News(id={self.id}, title='{self.title}', post_date={self.post_date})>"


class NewsLike(Base):
    """One like per (user, news) pair; the composite key enforces uniqueness."""

    __tablename__ = "news_likes"

    user_id = Column(String(450), primary_key=True)
    news_id = Column(Integer, ForeignKey("news.id", ondelete="CASCADE"), primary_key=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
