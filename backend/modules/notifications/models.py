"""
Notification module data models.
"""

from pydantic import BaseModel, Field


class EmailMessage(BaseModel):
    """A rendered outbound email."""

    to: str = Field(..., description="Recipient address")
    subject: str
    html: str
    text: str
    template: str = Field(..., description="Template name, for logging")
