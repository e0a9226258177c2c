"""
Pydantic Schemas for API Request/Response
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any
from datetime import datetime


# ==================== Envelope ====================

class APIResponse(BaseModel):
    """Envelope wrapped around every News API body."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int = 200
    is_success: bool = True
    error_messages: List[str] = Field(default_factory=list)
    result: Optional[Any] = None


# ==================== Reference Schemas ====================

class AuthorResponse(BaseModel):
    id: str
    user_name: str

    model_config = ConfigDict(from_attributes=True)


class RegionResponse(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CompanyResponse(BaseModel):
    id: int
    name: str
    region_id: int

    model_config = ConfigDict(from_attributes=True)


# ==================== News Schemas ====================

class FormattedNews(BaseModel):
    id: int
    title: str
    body: str
    post_date: Optional[datetime] = None
    update_date: Optional[datetime] = None
    source_url: Optional[str] = None
    like_count: int = 0
    is_liked_by_user: bool = False
    authors: List[AuthorResponse] = []
    companies: List[CompanyResponse] = []
    regions: List[RegionResponse] = []


class FormattedNewsPage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    remaining_rows_count: int
    selected_news: List[FormattedNews]
    is_it_end: bool


# ==================== Region Analytics Schemas ====================

class ActiveRegionResponse(BaseModel):
    region: RegionResponse
    news_count: int
    rank: int


class RegionDigestResponse(BaseModel):
    region: RegionResponse
    news: List[FormattedNews]
