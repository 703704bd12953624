from sqlalchemy import (
    Column, String, Boolean, DateTime, Enum as SQLEnum, Integer, Float, Text,
    ForeignKey, JSON, UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from syllabus_hub.core.database import Base
from syllabus_hub.core.types import GUID, generate_uuid


class ResourceType(str, enum.Enum):
    SYLLABUS = "syllabus"
    LECTURE = "lecture"
    NOTES = "notes"
    BOOK = "book"


def empty_rating_distribution() -> dict:
    return {str(star): 0 for star in range(1, 6)}


class Resource(Base):
    """A single learning resource attached to a subject"""
    __tablename__ = "resources"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    type = Column(SQLEnum(ResourceType), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    url = Column(String(2048), nullable=False)
    description = Column(Text, nullable=True)
    provider = Column(String(100), nullable=True)

    subject_id = Column(GUID, ForeignKey("subjects.id"), nullable=False, index=True)
    topics = Column(JSON, default=list, nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    # [{title, description, resource_link}]
    prerequisites = Column(JSON, default=list, nullable=False)

    added_by_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    is_approved = Column(Boolean, default=False, nullable=False, index=True)
    quality_score = Column(Integer, default=0, nullable=False)

    # Rating aggregate, recomputed from resource_ratings on every rating write
    average_rating = Column(Float, default=0.0, nullable=False)
    total_ratings = Column(Integer, default=0, nullable=False)
    rating_distribution = Column(JSON, default=empty_rating_distribution, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subject = relationship("Subject", back_populates="resources")
    added_by = relationship("User", back_populates="resources")
    ratings = relationship("ResourceRating", back_populates="resource", cascade="all, delete-orphan")
    roadmap_steps = relationship(
        "RoadmapStep",
        secondary="roadmap_step_resources",
        back_populates="resources",
    )

    def __repr__(self):
        return f"<Resource {self.title}>"


class ResourceRating(Base):
    """One user's rating of one resource"""
    __tablename__ = "resource_ratings"
    __table_args__ = (
        UniqueConstraint("resource_id", "user_id", name="uq_resource_ratings_resource_user"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_resource_ratings_rating_range"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    resource_id = Column(GUID, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    review = Column(Text, nullable=True)
    helpful_votes = Column(Integer, default=0, nullable=False)
    reported_count = Column(Integer, default=0, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    resource = relationship("Resource", back_populates="ratings")
    user = relationship("User", back_populates="ratings")
