from enum import Enum as PyEnum

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base

DEFAULT_SALARY = "negotiable"


class JobStatus(PyEnum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


class WorkMode(PyEnum):
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"
    ON_SITE = "ON_SITE"


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    salary = Column(String(255), nullable=False, default=DEFAULT_SALARY)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=JobStatus.OPEN.value)
    city = Column(String(255), nullable=False)
    state = Column(String(50), nullable=False)
    work_mode = Column(String(20), nullable=True)
    open_apply = Column(Boolean, nullable=False, default=False)
    validation = Column(Boolean, nullable=False, default=True)
    premium = Column(Boolean, nullable=False, default=False)
    selected_candidate_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    business = relationship("Business", back_populates="offers")
    selected_candidate = relationship("User", foreign_keys=[selected_candidate_id])
    applications = relationship(
        "JobApplication", back_populates="job", cascade="all, delete-orphan"
    )
    candidates = relationship(
        "User",
        secondary="job_applications",
        viewonly=True,
        order_by="User.id",
    )

    @property
    def candidate_ids(self) -> list[int]:
        return [candidate.id for candidate in self.candidates]

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, title={self.title}, status={self.status})>"

    __table_args__ = (
        Index("ix_jobs_status", "status"),
    )
