from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from jobboard.models.job import DEFAULT_SALARY, JobStatus, WorkMode


class JobBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str
    description: Optional[str] = None
    salary: str = DEFAULT_SALARY
    city: str
    state: str
    work_mode: Optional[WorkMode] = None
    open_apply: bool = False
    validation: bool = True
    premium: bool = False

    @field_validator("title", "city", "state")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v

    @field_validator("salary", mode="before")
    @classmethod
    def default_blank_salary(cls, v: Optional[str]) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_SALARY
        return str(v).strip()


class JobCreate(JobBase):
    """Fields a business may set on a new listing. Status always starts OPEN."""


class JobUpdate(BaseModel):
    """Partial update. Unknown fields, including status, are rejected."""
    model_config = ConfigDict(use_enum_values=True, extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    salary: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    work_mode: Optional[WorkMode] = None
    open_apply: Optional[bool] = None
    validation: Optional[bool] = None
    premium: Optional[bool] = None

    @field_validator("title", "city", "state")
    @classmethod
    def validate_required_text(cls, v: Optional[str]) -> Optional[str]:
        # None leaves the field unchanged; a value may not be blank
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be blank")
        return v

    @field_validator("salary", mode="before")
    @classmethod
    def default_blank_salary(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return str(v).strip() or DEFAULT_SALARY


class JobSummary(BaseModel):
    id: int
    title: str
    salary: str
    city: str
    state: str
    status: JobStatus
    work_mode: Optional[WorkMode] = None

    class Config:
        from_attributes = True


class JobFields(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    salary: str
    business_id: int
    status: JobStatus
    city: str
    state: str
    work_mode: Optional[WorkMode] = None
    open_apply: bool
    validation: bool
    premium: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JobResponse(JobFields):
    candidate_ids: list[int] = []
    selected_candidate_id: Optional[int] = None
