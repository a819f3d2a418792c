import logging
from enum import Enum

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from jobboard.models import Business, User
from jobboard.services.errors import (
    AccountInactiveError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from jobboard.services.passwords import check_password_strength, hash_password, verify_password
from jobboard.services.tokens import TokenService

logger = logging.getLogger(__name__)


class AccountKind(str, Enum):
    USER = "user"
    BUSINESS = "business"

    @property
    def model(self):
        return User if self is AccountKind.USER else Business

    @property
    def label(self) -> str:
        return "User" if self is AccountKind.USER else "Business"


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def find_by_email(db: Session, kind: AccountKind, email: str):
    model = kind.model
    return db.query(model).filter(model.email == normalize_email(email)).first()


def _conflict_message(error: IntegrityError) -> str:
    """Name the unique field a failed insert collided with."""
    if "cnpj" in str(error.orig).lower():
        return "CNPJ already registered"
    return "Email already registered"


def commit_or_raise(db: Session, action: str) -> None:
    """Commit the session, turning database failures into StorageError."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database error while trying to %s", action)
        raise StorageError() from e


class AccountAuthenticator:
    """Signup, login and account lifecycle for users and businesses."""

    def __init__(self, db: Session, tokens: TokenService):
        self.db = db
        self.tokens = tokens

    def signup(self, kind: AccountKind, form: dict):
        form = dict(form)
        email = normalize_email(form.pop("email", None))
        password = form.pop("password", None)

        if not email or not password:
            raise ValidationError("Please provide an email and a password")

        if find_by_email(self.db, kind, email):
            raise ConflictError("Email already registered")

        cnpj = form.get("cnpj")
        if kind is AccountKind.BUSINESS and cnpj and (
            self.db.query(Business).filter(Business.cnpj == cnpj).first()
        ):
            raise ConflictError("CNPJ already registered")

        check_password_strength(password)

        account = kind.model(**form, email=email, password_hash=hash_password(password))
        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent signup for the same email or cnpj
            self.db.rollback()
            logger.warning("Signup for %s %s hit a unique constraint: %s", kind.value, email, e.orig)
            raise ConflictError(_conflict_message(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to create %s account for %s", kind.value, email)
            raise StorageError("Unable to create account. Please try again later.") from e

        self.db.refresh(account)
        logger.info("Created %s account %d", kind.value, account.id)
        return account

    def login(self, kind: AccountKind, email: str | None, password: str | None):
        """Return ``(account, session_token)`` for valid credentials."""
        if not email or not password:
            raise ValidationError("Please fill in all the fields")

        account = find_by_email(self.db, kind, email)
        if not account:
            logger.info("Login failed for %s %s: no such account", kind.value, normalize_email(email))
            raise NotFoundError(f"{kind.label} not found")

        if not verify_password(password, account.password_hash):
            logger.info("Login failed for %s %d: wrong password", kind.value, account.id)
            raise InvalidCredentialsError("Invalid email or password. Please try again.")

        if not account.active:
            raise AccountInactiveError()

        token = self.tokens.issue_session_token(account, kind.value)
        return account, token

    def get_profile(self, kind: AccountKind, account_id: int):
        model = kind.model
        reference = model.history_jobs if kind is AccountKind.USER else model.offers
        account = (
            self.db.query(model)
            .options(selectinload(reference))
            .filter(model.id == account_id)
            .first()
        )
        if not account:
            raise NotFoundError(f"{kind.label} not found")
        return account

    def deactivate(self, kind: AccountKind, account_id: int):
        """Soft delete: accounts are never removed, only marked inactive."""
        model = kind.model
        result = self.db.execute(
            update(model).where(model.id == account_id).values(active=False)
        )
        if result.rowcount == 0:
            raise NotFoundError(f"{kind.label} not found")
        commit_or_raise(self.db, f"deactivate {kind.value} {account_id}")
        logger.info("Deactivated %s account %d", kind.value, account_id)
        return self.db.get(model, account_id)
