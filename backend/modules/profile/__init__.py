"""
Profile module.

The authenticated user's own profile (contact data and address).
"""

from .models import AddressUpdate, Profile, ProfileResponse, ProfileUpdate
from .service import ProfileService

__all__ = [
    "AddressUpdate",
    "Profile",
    "ProfileResponse",
    "ProfileUpdate",
    "ProfileService",
]
