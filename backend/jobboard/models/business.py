from enum import Enum as PyEnum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base
from jobboard.models.user import DEFAULT_PICTURE_URL


class BusinessRole(PyEnum):
    ADMIN = "ADMIN"
    BUSINESS = "BUSINESS"


class Business(Base):
    """A hiring company account. Owns job listings through ``offers``."""

    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    cnpj = Column(String(18), unique=True, nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    logo = Column(String(1000), nullable=False, default=DEFAULT_PICTURE_URL)
    role = Column(String(20), nullable=False, default=BusinessRole.BUSINESS.value)
    phone = Column(String(50), nullable=False)
    password_hash = Column(String(255), nullable=False)
    reset_password_token = Column(String(512), nullable=False, default="", index=True)
    active = Column(Boolean, nullable=False, default=True)
    description = Column(Text, nullable=True)

    # Address
    street = Column(String(255), nullable=True)
    number = Column(String(20), nullable=True)
    neighborhood = Column(String(255), nullable=True)
    zip_code = Column(String(20), nullable=True)
    complement = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    state = Column(String(50), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    offers = relationship("Job", back_populates="business", order_by="Job.id")

    def __repr__(self) -> str:
        return f"<Business(id={self.id}, email={self.email}, role={self.role})>"
