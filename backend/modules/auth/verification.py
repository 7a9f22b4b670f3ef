"""
Email verification token lifecycle.

A token is 32 random bytes (URL-safe base64) stored on the user record with
an expiry. It is single use: consuming it verifies the user and clears the
token in one storage operation.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from starlette.concurrency import run_in_threadpool

from shared.models import normalize_email, utc_now
from modules.notifications import Mailer

from .interfaces import IUserRepository
from .models import ReissueStatus, UserRecord

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
DEFAULT_TTL_MINUTES = 60


class VerificationManager:
    """Issues, consumes and reissues email verification tokens."""

    def __init__(
        self,
        users: IUserRepository,
        mailer: Mailer,
        ttl_minutes: int = DEFAULT_TTL_MINUTES,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._users = users
        self._mailer = mailer
        self._ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock

    async def issue(self, user: UserRecord) -> Optional[str]:
        """
        Store a fresh token on the user and queue the verification email.

        A previous token, if any, stops working. Email delivery happens in
        the background and its failure does not undo the issuance.

        Returns:
            The new token, or None when the store refused it (the account
            is gone or already verified) and no email was sent
        """
        token = secrets.token_urlsafe(TOKEN_BYTES)
        expires_at = self._clock() + self._ttl

        stored = await run_in_threadpool(
            self._users.set_verification, user.email, token, expires_at
        )
        if not stored:
            logger.warning(f"Verification token not stored for {user.email} (missing or verified)")
            return None

        self._mailer.send_verification(user.email, user.name, token)
        logger.info(f"Verification token issued for {user.email}")
        return token

    async def consume(self, token: str) -> bool:
        """
        Verify the user holding `token`.

        Returns:
            True exactly once per live token; False for unknown, expired or
            already used tokens
        """
        if not token:
            return False

        user = await run_in_threadpool(self._users.consume_verification, token, self._clock())
        if user is None:
            return False

        logger.info(f"Email verified for {user.email}")
        return True

    async def reissue(self, email: str) -> ReissueStatus:
        email = normalize_email(email)
        user = await run_in_threadpool(self._users.get_by_email, email)
        if user is None:
            return ReissueStatus.UNKNOWN_EMAIL
        if user.is_verified:
            return ReissueStatus.ALREADY_VERIFIED

        await self.issue(user)
        return ReissueStatus.SENT
