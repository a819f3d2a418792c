from enum import Enum as PyEnum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base

DEFAULT_PICTURE_URL = "https://cdn.wallpapersafari.com/92/63/wUq2AY.jpg"


class UserRole(PyEnum):
    ADMIN = "ADMIN"
    USER = "USER"


class User(Base):
    """A job seeker account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    profile_picture = Column(String(1000), nullable=False, default=DEFAULT_PICTURE_URL)
    role = Column(String(20), nullable=False, default=UserRole.USER.value)
    phone = Column(String(50), nullable=False)
    password_hash = Column(String(255), nullable=False)
    reset_password_token = Column(String(512), nullable=False, default="", index=True)
    active = Column(Boolean, nullable=False, default=True)
    resume = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    applications = relationship(
        "JobApplication", back_populates="user", cascade="all, delete-orphan"
    )
    history_jobs = relationship(
        "Job",
        secondary="job_applications",
        viewonly=True,
        order_by="Job.id",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
