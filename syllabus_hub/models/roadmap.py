from sqlalchemy import (
    Column, String, Boolean, DateTime, Enum as SQLEnum, Integer, Float, Text,
    ForeignKey, JSON, Table,
)
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from syllabus_hub.core.database import Base
from syllabus_hub.core.types import GUID, generate_uuid


class RoadmapType(str, enum.Enum):
    MIDSEM = "midsem"
    ENDSEM = "endsem"
    PRACTICAL = "practical"
    GENERAL = "general"


class RoadmapDifficulty(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


roadmap_step_resources = Table(
    "roadmap_step_resources",
    Base.metadata,
    Column("step_id", GUID, ForeignKey("roadmap_steps.id", ondelete="CASCADE"), primary_key=True),
    Column("resource_id", GUID, ForeignKey("resources.id", ondelete="CASCADE"), primary_key=True),
)


class Roadmap(Base):
    """Study plan for a subject"""
    __tablename__ = "roadmaps"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    subject_id = Column(GUID, ForeignKey("subjects.id"), nullable=False, index=True)
    type = Column(SQLEnum(RoadmapType), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    difficulty = Column(SQLEnum(RoadmapDifficulty), default=RoadmapDifficulty.BEGINNER, nullable=False)
    # Derived: sum of step hours, never written by clients
    total_estimated_hours = Column(Float, default=0.0, nullable=False)

    created_by_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    is_public = Column(Boolean, default=True, nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False, index=True)
    tags = Column(JSON, default=list, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subject = relationship("Subject", back_populates="roadmaps")
    created_by = relationship("User", back_populates="roadmaps")
    steps = relationship(
        "RoadmapStep",
        back_populates="roadmap",
        order_by="RoadmapStep.order",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Roadmap {self.title}>"


class RoadmapStep(Base):
    __tablename__ = "roadmap_steps"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    roadmap_id = Column(GUID, ForeignKey("roadmaps.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False)
    order = Column("step_order", Integer, nullable=False)
    estimated_hours = Column(Float, nullable=False)
    prerequisites = Column(JSON, default=list, nullable=False)

    roadmap = relationship("Roadmap", back_populates="steps")
    resources = relationship(
        "Resource",
        secondary=roadmap_step_resources,
        back_populates="roadmap_steps",
    )
