"""
Email transports.

- LogEmailTransport: writes the message to the log, with the body at DEBUG
  only. Used in development and as a test double; selected with
  EMAIL_TRANSPORT=log and refused when ENVIRONMENT=production.
- ResendEmailTransport: delivers through the Resend API; selected with
  EMAIL_TRANSPORT=resend.
"""

import logging

import resend
from resend.exceptions import ResendError

from .exceptions import EmailDeliveryError
from .models import EmailMessage

logger = logging.getLogger(__name__)


class LogEmailTransport:
    """Logs emails instead of sending them."""

    name = "log"

    def send(self, message: EmailMessage) -> None:
        logger.info(f"[email:{message.template}] to={message.to} subject={message.subject!r}")
        # The body carries live links and tokens
        logger.debug(f"[email:{message.template}] body:\n{message.text}")


class ResendEmailTransport:
    """Sends emails through Resend."""

    name = "resend"

    def __init__(self, api_key: str, sender: str):
        if not api_key:
            raise ValueError("RESEND_API_KEY is required when EMAIL_TRANSPORT=resend")
        self._api_key = api_key
        self._sender = sender

    def send(self, message: EmailMessage) -> None:
        payload = {
            "from": self._sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }

        resend.api_key = self._api_key
        try:
            response = resend.Emails.send(payload)
        except ResendError as e:
            raise EmailDeliveryError(
                f"Resend rejected '{message.template}' email", provider=self.name, reason=str(e)
            )

        if not isinstance(response, dict) or not response.get("id"):
            raise EmailDeliveryError(
                f"Resend returned no message id for '{message.template}' email",
                provider=self.name,
                reason=str(response),
            )

        logger.info(f"Email sent to {message.to}: {message.template} (id: {response['id']})")
