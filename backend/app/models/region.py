"""
Region and Company Database Models
"""
from sqlalchemy import Column, String, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship

from app.db.database import Base


class Region(Base):
    """Environmental-monitoring region."""

    __tablename__ = "regions"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)

    # Relationships
    companies = relationship("Company", back_populates="region")

    def __repr__(self):
        return f"<Region(id={self.id}, name='{self.name}')>"


class Company(Base):
    """Company operating in exactly one region."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String(45), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    region_id = Column(Integer, ForeignKey("regions.id"), nullable=False, index=True)

    # Relationships
    region = relationship("Region", back_populates="companies")

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}', region_id={self.region_id})>"
