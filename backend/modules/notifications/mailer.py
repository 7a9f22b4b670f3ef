"""
Mailer: renders templates and dispatches them through a transport.

Sends are fire-and-forget. The caller's state change has already been
committed when `dispatch` returns; a failed delivery is logged and never
propagates.
"""

import asyncio
import html
import logging
from typing import Optional
from urllib.parse import quote

from starlette.concurrency import run_in_threadpool

from .interfaces import IEmailTransport
from .models import EmailMessage

logger = logging.getLogger(__name__)


VERIFY_SUBJECT = "Confirm your email"

VERIFY_HTML = """\
<!DOCTYPE html>
<html>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="color: #1a1a1a; font-size: 24px;">Hi {name},</h1>
    <p>Please confirm your email address to finish setting up your account.</p>
    <p style="margin: 30px 0;">
        <a href="{link}" style="background: #1a1a1a; color: #fff; padding: 12px 24px; text-decoration: none; border-radius: 6px; display: inline-block;">Confirm email</a>
    </p>
    <p style="color: #666; font-size: 14px;">This link expires in {ttl} minutes. If you did not create an account, ignore this email.</p>
</body>
</html>
"""

VERIFY_TEXT = """\
Hi {name},

Please confirm your email address to finish setting up your account:

{link}

This link expires in {ttl} minutes. If you did not create an account, ignore this email.
"""


class Mailer:
    """
    Email dispatcher used by the auth module.

    Background sends are tracked so the application can wait for them on
    shutdown (and tests can wait for them deterministically).
    """

    def __init__(
        self,
        transport: IEmailTransport,
        public_base_url: str,
        verification_ttl_minutes: int = 60,
    ):
        self._transport = transport
        self._public_base_url = public_base_url.rstrip("/")
        self._verification_ttl_minutes = verification_ttl_minutes
        self._pending: set[asyncio.Task] = set()

    @property
    def transport(self) -> IEmailTransport:
        return self._transport

    def verification_link(self, token: str) -> str:
        return f"{self._public_base_url}/auth/verify?token={quote(token, safe='')}"

    def render_verification(self, email: str, name: Optional[str], token: str) -> EmailMessage:
        context = {
            "name": name or email,
            "link": self.verification_link(token),
            "ttl": self._verification_ttl_minutes,
        }
        # The name is user input; only the HTML body needs escaping
        html_context = {
            **context,
            "name": html.escape(context["name"]),
            "link": html.escape(context["link"]),
        }
        return EmailMessage(
            to=email,
            subject=VERIFY_SUBJECT,
            html=VERIFY_HTML.format(**html_context),
            text=VERIFY_TEXT.format(**context),
            template="verify_email",
        )

    def send_verification(self, email: str, name: Optional[str], token: str) -> None:
        """Queue the verification email for `email`."""
        self.dispatch(self.render_verification(email, name, token))

    def dispatch(self, message: EmailMessage) -> None:
        """
        Schedule delivery in the background.

        Must be called from a running event loop.
        """
        task = asyncio.get_running_loop().create_task(self._deliver(message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, message: EmailMessage) -> None:
        try:
            await run_in_threadpool(self._transport.send, message)
        except Exception:
            logger.exception(
                f"Failed to deliver '{message.template}' email to {message.to} "
                f"via {self._transport.name}"
            )

    async def drain(self) -> None:
        """Wait for every pending delivery to finish."""
        while self._pending:
            batch = list(self._pending)
            await asyncio.gather(*batch, return_exceptions=True)
            self._pending.difference_update(batch)

    @property
    def pending(self) -> int:
        return len(self._pending)
