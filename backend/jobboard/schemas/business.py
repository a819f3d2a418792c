import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from jobboard.schemas.job import JobSummary

CNPJ_PATTERN = re.compile(r"^\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}$")


class BusinessCreate(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    name: str
    phone: str
    cnpj: Optional[str] = None
    logo: Optional[str] = None
    description: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    neighborhood: Optional[str] = None
    zip_code: Optional[str] = None
    complement: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

    @field_validator("name", "phone")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v

    @field_validator("cnpj", mode="before")
    @classmethod
    def validate_cnpj(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if not CNPJ_PATTERN.match(v):
            raise ValueError("CNPJ must be formatted as 00.000.000/0000-00")
        return v

    @field_validator(
        "street", "number", "neighborhood", "zip_code", "complement", "city", "state",
        mode="before",
    )
    @classmethod
    def strip_address(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > 128:
            raise ValueError("Password must be at most 128 characters long")
        return v


class BusinessResponse(BaseModel):
    """A business as returned to clients. Never carries the password hash."""
    id: int
    name: str
    email: str
    role: str
    phone: str
    cnpj: Optional[str] = None
    logo: str
    description: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    neighborhood: Optional[str] = None
    zip_code: Optional[str] = None
    complement: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BusinessProfile(BusinessResponse):
    offers: list[JobSummary] = []


class BusinessPublic(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    description: Optional[str] = None

    class Config:
        from_attributes = True
