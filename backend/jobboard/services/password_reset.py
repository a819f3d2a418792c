"""Password reset: issue, mail, check and redeem single-use reset tokens.

The live token is stored verbatim on the account. Redemption looks the
account up by that literal value and clears it in the same UPDATE that writes
the new hash, so a token works once even while its signature is still valid.
"""

import logging
from typing import Callable
from urllib.parse import quote

from sqlalchemy import update
from sqlalchemy.orm import Session

from jobboard.services.accounts import AccountKind, commit_or_raise, find_by_email
from jobboard.services.email import send_password_reset_email
from jobboard.services.errors import (
    MailDeliveryError,
    NotFoundError,
    TokenExpiredError,
    TokenInvalidError,
)
from jobboard.services.passwords import check_password_strength, hash_password, update_password
from jobboard.services.tokens import TokenService

logger = logging.getLogger(__name__)

SendResetEmail = Callable[[str, str, str, int], bool]


class PasswordResetFlow:
    def __init__(
        self,
        db: Session,
        tokens: TokenService,
        reset_url_base: str,
        send_email: SendResetEmail | None = None,
    ):
        self.db = db
        self.tokens = tokens
        self.reset_url_base = reset_url_base.rstrip("/")
        self.send_email = send_email or send_password_reset_email

    def build_reset_url(self, kind: AccountKind, token: str) -> str:
        return f"{self.reset_url_base}/{kind.value}/{quote(token, safe='')}"

    def request_reset(self, kind: AccountKind, email: str) -> None:
        """Issue a reset token for ``email`` and mail the link.

        Re-requesting overwrites the outstanding token. A mail failure is
        reported but the stored token is kept.
        """
        account = find_by_email(self.db, kind, email)
        if not account:
            raise NotFoundError(f"{kind.label} not found")

        model = kind.model
        token = self.tokens.issue_reset_token(account.id)
        self.db.execute(
            update(model).where(model.id == account.id).values(reset_password_token=token)
        )
        commit_or_raise(self.db, f"store reset token for {kind.value} {account.id}")
        logger.info("Issued password reset token for %s %d", kind.value, account.id)

        expires_minutes = int(self.tokens.reset_ttl.total_seconds() // 60)
        sent = self.send_email(
            account.email, account.name, self.build_reset_url(kind, token), expires_minutes
        )
        if not sent:
            logger.error("Password reset email to %s %d was not delivered", kind.value, account.id)
            raise MailDeliveryError()

    def _find_holder(self, kind: AccountKind, token: str):
        """Return the account currently holding ``token``, verifying it first."""
        if not token:
            raise TokenInvalidError()

        account_id = self.tokens.verify_reset_token(token)

        model = kind.model
        account = self.db.query(model).filter(model.reset_password_token == token).first()
        if not account or account.id != account_id:
            raise TokenInvalidError()
        return account

    def check_token_valid(self, kind: AccountKind, token: str) -> bool:
        try:
            self._find_holder(kind, token)
        except (TokenInvalidError, TokenExpiredError):
            return False
        return True

    def redeem_reset(self, kind: AccountKind, token: str, new_password: str) -> None:
        account = self._find_holder(kind, token)

        check_password_strength(new_password or "")

        try:
            update_password(
                self.db,
                kind.model,
                account.id,
                hash_password(new_password),
                expected_reset_token=token,
            )
        except NotFoundError:
            # A concurrent redemption cleared the token first
            self.db.rollback()
            raise TokenInvalidError()

        commit_or_raise(self.db, f"reset password for {kind.value} {account.id}")
        logger.info("Password reset completed for %s %d", kind.value, account.id)
