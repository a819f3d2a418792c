from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from jobboard.schemas.job import JobSummary


class UserCreate(BaseModel):
    # Presence of email and password is checked by the signup service so a
    # missing value is reported as a 400 like any other signup failure.
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    name: str
    phone: str
    profile_picture: Optional[str] = None
    resume: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip().lower()
        if len(v) < 3:
            raise ValueError("Name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("Name must be at most 50 characters")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Phone is required")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > 128:
            raise ValueError("Password must be at most 128 characters long")
        return v


class UserResponse(BaseModel):
    """A user as returned to clients. Never carries the password hash."""
    id: int
    name: str
    email: str
    role: str
    phone: str
    profile_picture: str
    resume: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserProfile(UserResponse):
    history_jobs: list[JobSummary] = []


class CandidateResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    resume: Optional[str] = None

    class Config:
        from_attributes = True
