"""
Notification module exceptions.

Delivery errors never reach API clients: the mailer logs them and the
triggering operation still succeeds.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class EmailDeliveryError(ExternalServiceError):
    """Raised by a transport when the provider rejects or fails a send."""

    def __init__(self, message: str, provider: str, reason: Optional[str] = None):
        super().__init__(
            message,
            service=provider,
            code="EMAIL_DELIVERY_FAILED",
            details={"reason": reason} if reason else {},
        )
