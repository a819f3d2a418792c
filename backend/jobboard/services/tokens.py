"""Signed session and password-reset tokens.

Both kinds are HS256 JWTs, but each is signed with its own secret and tagged
with a ``typ`` claim, so neither can be presented in place of the other.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError, ExpiredSignatureError

from jobboard.config import Settings, get_settings
from jobboard.services.errors import TokenExpiredError, TokenInvalidError

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "session"
RESET_TOKEN_TYPE = "reset"


@dataclass(frozen=True)
class SessionIdentity:
    """Caller identity carried by a session token."""
    id: int
    name: str
    email: str
    role: str
    kind: str


class TokenService:
    def __init__(
        self,
        session_secret: str,
        reset_secret: str,
        algorithm: str = "HS256",
        session_ttl: timedelta = timedelta(hours=12),
        reset_ttl: timedelta = timedelta(minutes=20),
    ):
        if session_secret == reset_secret:
            raise ValueError("Session and reset tokens must use different secrets")
        self._session_secret = session_secret
        self._reset_secret = reset_secret
        self._algorithm = algorithm
        self.session_ttl = session_ttl
        self.reset_ttl = reset_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            session_secret=settings.session_secret_key,
            reset_secret=settings.reset_secret_key,
            algorithm=settings.jwt_algorithm,
            session_ttl=timedelta(hours=settings.session_expire_hours),
            reset_ttl=timedelta(minutes=settings.reset_expire_minutes),
        )

    def issue_session_token(self, account, kind: str, now: datetime | None = None) -> str:
        """Create a session token for a User or Business."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(account.id),
            "name": account.name,
            "email": account.email,
            "role": account.role,
            "kind": kind,
            "typ": SESSION_TOKEN_TYPE,
            "iat": issued_at,
            "exp": issued_at + self.session_ttl,
        }
        return jwt.encode(claims, self._session_secret, algorithm=self._algorithm)

    def decode_session_token(self, token: str) -> SessionIdentity:
        payload = self._decode(token, self._session_secret, SESSION_TOKEN_TYPE)
        try:
            return SessionIdentity(
                id=int(payload["sub"]),
                name=payload["name"],
                email=payload["email"],
                role=payload["role"],
                kind=payload["kind"],
            )
        except (KeyError, TypeError, ValueError):
            raise TokenInvalidError("Invalid token payload")

    def issue_reset_token(self, account_id: int, now: datetime | None = None) -> str:
        """Create a password-reset token scoped to one account."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(account_id),
            "typ": RESET_TOKEN_TYPE,
            "iat": issued_at,
            "exp": issued_at + self.reset_ttl,
        }
        return jwt.encode(claims, self._reset_secret, algorithm=self._algorithm)

    def verify_reset_token(self, token: str) -> int:
        """Return the account id a reset token was issued for."""
        payload = self._decode(token, self._reset_secret, RESET_TOKEN_TYPE)
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise TokenInvalidError("Invalid token payload")

    def _decode(self, token: str, secret: str, expected_type: str) -> dict:
        try:
            payload = jwt.decode(token, secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError:
            raise TokenInvalidError()

        if payload.get("typ") != expected_type:
            raise TokenInvalidError()
        return payload


def get_token_service() -> TokenService:
    return TokenService.from_settings(get_settings())
