import logging
import re

from passlib.context import CryptContext
from sqlalchemy import update
from sqlalchemy.orm import Session

from jobboard.services.errors import HashingError, NotFoundError, WeakPasswordError

logger = logging.getLogger(__name__)

SALT_ROUNDS = 10
SPECIAL_CHARACTERS = "#?!@$ %^&*-"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=SALT_ROUNDS)

# (pattern, message) pairs checked in order; the first failing rule is reported.
PASSWORD_RULES = [
    (re.compile(r".{8,}", re.DOTALL), "Password must be at least 8 characters long"),
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (
        re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]"),
        f"Password must contain at least one special character ({SPECIAL_CHARACTERS.replace(' ', '')} or space)",
    ),
]


def check_password_strength(password: str) -> None:
    """Raise WeakPasswordError naming the first unmet rule."""
    for pattern, message in PASSWORD_RULES:
        if not pattern.search(password):
            raise WeakPasswordError(message)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as e:
        logger.exception("Password hashing failed")
        raise HashingError() from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    A mismatch returns False; only a malformed hash raises.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error("Stored password hash could not be parsed: %s", e)
        raise HashingError("Stored password hash is malformed") from e


def update_password(
    db: Session,
    model,
    account_id: int,
    new_hash: str,
    expected_reset_token: str | None = None,
) -> None:
    """Replace an account's password hash and clear its reset token.

    Issued as one UPDATE. With ``expected_reset_token`` the row must still hold
    that exact token, otherwise nothing is written. The caller commits.
    """
    stmt = (
        update(model)
        .where(model.id == account_id)
        .values(password_hash=new_hash, reset_password_token="")
    )
    if expected_reset_token is not None:
        stmt = stmt.where(model.reset_password_token == expected_reset_token)

    result = db.execute(stmt)
    if result.rowcount == 0:
        raise NotFoundError(f"{model.__name__} not found")
