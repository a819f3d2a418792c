from typing import Optional

from pydantic import BaseModel, EmailStr

from jobboard.schemas.business import BusinessResponse
from jobboard.schemas.user import UserResponse


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserLoginResponse(BaseModel):
    account: UserResponse
    token: str
    token_type: str = "bearer"


class BusinessLoginResponse(BaseModel):
    account: BusinessResponse
    token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetConfirm(BaseModel):
    password: str


class TokenValidResponse(BaseModel):
    valid: bool


class UploadResponse(BaseModel):
    url: str
