from jobboard.schemas.auth import (
    BusinessLoginResponse,
    LoginRequest,
    MessageResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    TokenValidResponse,
    UploadResponse,
    UserLoginResponse,
)
from jobboard.schemas.business import BusinessCreate, BusinessProfile, BusinessPublic, BusinessResponse
from jobboard.schemas.job import JobCreate, JobFields, JobResponse, JobSummary, JobUpdate
from jobboard.schemas.listing import JobDetail, JobPublicDetail
from jobboard.schemas.user import CandidateResponse, UserCreate, UserProfile, UserResponse

__all__ = [
    "BusinessLoginResponse",
    "LoginRequest",
    "UserLoginResponse",
    "MessageResponse",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "TokenValidResponse",
    "UploadResponse",
    "BusinessCreate",
    "BusinessProfile",
    "BusinessPublic",
    "BusinessResponse",
    "JobCreate",
    "JobFields",
    "JobResponse",
    "JobSummary",
    "JobUpdate",
    "JobDetail",
    "JobPublicDetail",
    "CandidateResponse",
    "UserCreate",
    "UserProfile",
    "UserResponse",
]
