"""
User Database Model
"""
from sqlalchemy import Column, String, DateTime
from datetime import datetime

from app.db.database import Base


class User(Base):
    """
    Account known to the identity collaborator.

    Only the fields news formatting needs are mirrored here; credentials and
    roles stay with the identity service.
    """

    __tablename__ = "users"

    id = Column(String(450), primary_key=True)
    user_name = Column(String(256), nullable=False, unique=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, user_name='{self.user_name}')>"
