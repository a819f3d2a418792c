"""Signup, login, profile and password reset routes for both account kinds.

Users and businesses expose the same surface under their own prefix, so the
router is built once per kind.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from jobboard.dependencies import (
    get_authenticator,
    get_current_business,
    get_current_user,
    get_password_reset_flow,
)
from jobboard.schemas import (
    BusinessCreate,
    BusinessLoginResponse,
    BusinessProfile,
    BusinessResponse,
    LoginRequest,
    MessageResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    TokenValidResponse,
    UserCreate,
    UserLoginResponse,
    UserProfile,
    UserResponse,
)
from jobboard.services import AccountAuthenticator, AccountKind, PasswordResetFlow, SessionIdentity
from jobboard.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def build_account_router(
    kind: AccountKind,
    create_schema: type[BaseModel],
    response_schema: type[BaseModel],
    profile_schema: type[BaseModel],
    login_schema: type[BaseModel],
    current_account,
) -> APIRouter:
    router = APIRouter()

    @router.post("/signup", response_model=response_schema, status_code=status.HTTP_201_CREATED)
    def signup(
        form: create_schema,
        authenticator: AccountAuthenticator = Depends(get_authenticator),
    ):
        """Create an account. The response never includes the password hash."""
        account = authenticator.signup(kind, form.model_dump(exclude_none=True))
        return response_schema.model_validate(account)

    @router.post("/login", response_model=login_schema)
    def login(
        credentials: LoginRequest,
        authenticator: AccountAuthenticator = Depends(get_authenticator),
    ):
        """Exchange email and password for a bearer session token."""
        try:
            account, token = authenticator.login(kind, credentials.email, credentials.password)
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
        return login_schema(account=response_schema.model_validate(account), token=token)

    @router.get("/profile", response_model=profile_schema)
    def profile(
        identity: SessionIdentity = Depends(current_account),
        authenticator: AccountAuthenticator = Depends(get_authenticator),
    ):
        account = authenticator.get_profile(kind, identity.id)
        return profile_schema.model_validate(account)

    @router.delete("/delete", response_model=response_schema)
    def delete_account(
        identity: SessionIdentity = Depends(current_account),
        authenticator: AccountAuthenticator = Depends(get_authenticator),
    ):
        """Deactivate the caller's account. Accounts are never hard deleted."""
        account = authenticator.deactivate(kind, identity.id)
        return response_schema.model_validate(account)

    @router.post("/forgot-password", response_model=MessageResponse)
    def forgot_password(
        payload: PasswordResetRequest,
        flow: PasswordResetFlow = Depends(get_password_reset_flow),
    ):
        """Email a single-use password reset link."""
        try:
            flow.request_reset(kind, payload.email)
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
        return MessageResponse(message="A password reset link has been sent to your email.")

    @router.get("/reset-password/{token}", response_model=TokenValidResponse)
    def check_reset_token(
        token: str,
        flow: PasswordResetFlow = Depends(get_password_reset_flow),
    ):
        """Tell the client whether a reset link can still be used."""
        return TokenValidResponse(valid=flow.check_token_valid(kind, token))

    @router.post("/reset-password/{token}", response_model=MessageResponse)
    def reset_password(
        token: str,
        payload: PasswordResetConfirm,
        flow: PasswordResetFlow = Depends(get_password_reset_flow),
    ):
        flow.redeem_reset(kind, token, payload.password)
        return MessageResponse(message="Password updated successfully.")

    return router


user_router = build_account_router(
    AccountKind.USER,
    create_schema=UserCreate,
    response_schema=UserResponse,
    profile_schema=UserProfile,
    login_schema=UserLoginResponse,
    current_account=get_current_user,
)

business_router = build_account_router(
    AccountKind.BUSINESS,
    create_schema=BusinessCreate,
    response_schema=BusinessResponse,
    profile_schema=BusinessProfile,
    login_schema=BusinessLoginResponse,
    current_account=get_current_business,
)
