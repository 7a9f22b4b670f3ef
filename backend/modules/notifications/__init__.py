"""
Notifications module.

Outbound email. The transport is chosen by configuration
(EMAIL_TRANSPORT=log|resend) and sends are dispatched in the background.

Public API:
- IEmailTransport: Interface for delivery backends
- Mailer: Template rendering and background dispatch
- LogEmailTransport, ResendEmailTransport: Transports
- EmailDeliveryError: Raised by transports, logged by the mailer
"""

from .interfaces import IEmailTransport
from .models import EmailMessage
from .exceptions import EmailDeliveryError
from .mailer import Mailer
from .transports import LogEmailTransport, ResendEmailTransport

__all__ = [
    # Interface
    "IEmailTransport",
    # Models
    "EmailMessage",
    # Implementations
    "Mailer",
    "LogEmailTransport",
    "ResendEmailTransport",
    # Exceptions
    "EmailDeliveryError",
]
