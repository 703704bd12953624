"""
Catalog hierarchy: Branch -> Program -> Year -> Semester -> Subject.

Reference data, created by the seed script or admins.
"""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from syllabus_hub.core.database import Base
from syllabus_hub.core.types import GUID, generate_uuid


class Branch(Base):
    """Engineering branch (CSE, ECE, ...)"""
    __tablename__ = "branches"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    code = Column(String(10), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    programs = relationship("Program", back_populates="branch", order_by="Program.code")
    subjects = relationship("Subject", back_populates="branch")

    def __repr__(self):
        return f"<Branch {self.code}>"


class Program(Base):
    """Degree program offered by a branch (BTECH, MTECH)"""
    __tablename__ = "programs"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    code = Column(String(20), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    branch_id = Column(GUID, ForeignKey("branches.id"), nullable=False, index=True)
    duration_years = Column(Integer, default=4, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    branch = relationship("Branch", back_populates="programs")
    years = relationship("Year", back_populates="program", order_by="Year.year")

    def __repr__(self):
        return f"<Program {self.code}>"


class Year(Base):
    __tablename__ = "years"
    __table_args__ = (UniqueConstraint("program_id", "year", name="uq_years_program_year"),)

    id = Column(GUID, primary_key=True, default=generate_uuid)
    year = Column(Integer, nullable=False)
    program_id = Column(GUID, ForeignKey("programs.id"), nullable=False, index=True)

    program = relationship("Program", back_populates="years")
    semesters = relationship("Semester", back_populates="year", order_by="Semester.number")


class Semester(Base):
    __tablename__ = "semesters"
    __table_args__ = (UniqueConstraint("year_id", "number", name="uq_semesters_year_number"),)

    id = Column(GUID, primary_key=True, default=generate_uuid)
    number = Column(Integer, nullable=False, index=True)
    year_id = Column(GUID, ForeignKey("years.id"), nullable=False, index=True)

    year = relationship("Year", back_populates="semesters")
    subjects = relationship("Subject", back_populates="semester")


class Subject(Base):
    """Course taught in a given branch and semester"""
    __tablename__ = "subjects"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    code = Column(String(10), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    branch_id = Column(GUID, ForeignKey("branches.id"), nullable=False, index=True)
    semester_id = Column(GUID, ForeignKey("semesters.id"), nullable=False, index=True)
    credits = Column(Integer, default=3, nullable=False)
    topics = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    branch = relationship("Branch", back_populates="subjects")
    semester = relationship("Semester", back_populates="subjects")
    resources = relationship("Resource", back_populates="subject")
    roadmaps = relationship("Roadmap", back_populates="subject")

    def __repr__(self):
        return f"<Subject {self.code}>"
