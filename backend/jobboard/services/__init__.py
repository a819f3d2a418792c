from jobboard.services.accounts import AccountAuthenticator, AccountKind
from jobboard.services.email import send_password_reset_email
from jobboard.services.listings import ListingService
from jobboard.services.password_reset import PasswordResetFlow
from jobboard.services.passwords import (
    check_password_strength,
    hash_password,
    update_password,
    verify_password,
)
from jobboard.services.storage import UploadStorage, get_upload_storage
from jobboard.services.tokens import SessionIdentity, TokenService, get_token_service

__all__ = [
    "AccountAuthenticator",
    "AccountKind",
    "send_password_reset_email",
    "ListingService",
    "PasswordResetFlow",
    "check_password_strength",
    "hash_password",
    "update_password",
    "verify_password",
    "UploadStorage",
    "get_upload_storage",
    "SessionIdentity",
    "TokenService",
    "get_token_service",
]
