from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobboard.config import get_settings
from jobboard.database import get_db
from jobboard.services import (
    AccountAuthenticator,
    AccountKind,
    ListingService,
    PasswordResetFlow,
    SessionIdentity,
    TokenService,
    get_token_service,
)
from jobboard.services.errors import TokenExpiredError, TokenInvalidError

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> SessionIdentity:
    """Decode the bearer session token into the caller's identity. Raises 401.

    The identity comes from the token alone; no database lookup is made.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return tokens.decode_session_token(credentials.credentials)
    except (TokenInvalidError, TokenExpiredError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def _require_kind(identity: SessionIdentity, kind: AccountKind) -> SessionIdentity:
    if identity.kind != kind.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"This action requires a {kind.value} account",
        )
    return identity


def get_current_user(identity: SessionIdentity = Depends(get_current_identity)) -> SessionIdentity:
    return _require_kind(identity, AccountKind.USER)


def get_current_business(identity: SessionIdentity = Depends(get_current_identity)) -> SessionIdentity:
    return _require_kind(identity, AccountKind.BUSINESS)


def get_authenticator(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AccountAuthenticator:
    return AccountAuthenticator(db, tokens)


def get_password_reset_flow(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> PasswordResetFlow:
    return PasswordResetFlow(db, tokens, reset_url_base=get_settings().reset_url_base)


def get_listing_service(db: Session = Depends(get_db)) -> ListingService:
    return ListingService(db)
