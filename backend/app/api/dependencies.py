"""
Shared API dependencies
"""
from typing import Annotated, Optional

from fastapi import Depends, Security
from fastapi.security.api_key import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db.database import get_db

# The gateway validates the bearer token and forwards the subject here
caller_id_header = APIKeyHeader(name=settings.user_id_header, auto_error=False)


async def get_caller_id(caller_id: Optional[str] = Security(caller_id_header)) -> Optional[str]:
    """Authenticated caller id, or None for anonymous requests."""
    return caller_id or None


DbSession = Annotated[AsyncSession, Depends(get_db)]
CallerId = Annotated[Optional[str], Depends(get_caller_id)]
