"""
Profile service.

Reads and patches the caller's own user record. Address updates are merged
field by field into the stored address.
"""

import logging

from starlette.concurrency import run_in_threadpool

from shared.models import normalize_email
from modules.auth.exceptions import UserNotFoundError
from modules.auth.interfaces import IUserRepository
from modules.auth.models import Address

from .models import Profile, ProfileUpdate

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, users: IUserRepository):
        self._users = users

    async def get_profile(self, email: str) -> Profile:
        """
        Raises:
            UserNotFoundError: If the account no longer exists
        """
        email = normalize_email(email)
        user = await run_in_threadpool(self._users.get_by_email, email)
        if user is None:
            raise UserNotFoundError(email)
        return Profile.from_record(user)

    async def update_profile(self, email: str, patch: ProfileUpdate) -> Profile:
        """
        Apply the provided fields of `patch` to the user's profile.

        Raises:
            UserNotFoundError: If the account no longer exists
        """
        email = normalize_email(email)
        changes = patch.model_dump(exclude_unset=True, exclude={"address"})

        if patch.address is not None:
            current = await run_in_threadpool(self._users.get_by_email, email)
            if current is None:
                raise UserNotFoundError(email)
            merged = current.address.model_dump() if current.address else {}
            merged.update(patch.address.model_dump(exclude_unset=True))
            changes["address"] = Address(**merged)

        updated = await run_in_threadpool(self._users.update_profile, email, changes)
        if updated is None:
            raise UserNotFoundError(email)

        logger.info(f"Profile updated for {email}: {sorted(changes)}")
        return Profile.from_record(updated)
