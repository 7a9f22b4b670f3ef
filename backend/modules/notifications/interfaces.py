"""
Notification module interface.

The verification flow depends on IEmailTransport, never on a provider SDK.
Which transport runs is an explicit configuration choice (EMAIL_TRANSPORT).
"""

from typing import Protocol, runtime_checkable

from .models import EmailMessage


@runtime_checkable
class IEmailTransport(Protocol):
    """Synchronous delivery of one rendered email."""

    name: str

    def send(self, message: EmailMessage) -> None:
        """
        Deliver a message.

        Raises:
            EmailDeliveryError: If the provider did not accept the message
        """
        ...
