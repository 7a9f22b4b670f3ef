"""
Admin account seeding.

Makes sure a user exists for every email on the admin allow-list. Existing
accounts are left untouched; their passwords are never reset.
"""

import logging
import uuid

from shared.models import normalize_email, utc_now

from .models import UserRecord
from .passwords import PasswordHasher

logger = logging.getLogger(__name__)


def ensure_admin_seed(
    users,
    hasher: PasswordHasher,
    admin_emails: list[str],
    name: str = "Admin",
    password: str = "",
) -> int:
    """
    Create missing admin users.

    Args:
        users: User repository exposing `ensure_user`
        hasher: Password hasher
        admin_emails: Allow-listed emails
        name: Display name for created accounts
        password: Initial password; nothing is created when empty

    Returns:
        Number of users created
    """
    emails = [normalize_email(e) for e in admin_emails if normalize_email(e)]
    if not emails:
        logger.info("ADMIN_EMAILS is empty, no admin seed")
        return 0
    if not password:
        logger.warning("ADMIN_SEED_PASSWORD is not set, skipping admin seed")
        return 0

    password_hash = hasher.hash(password)
    created = 0
    for email in emails:
        user = UserRecord(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
            # Allow-listed addresses are trusted
            is_verified=True,
            created_at=utc_now(),
        )
        if users.ensure_user(user):
            created += 1
            logger.info(f"Seed: admin user created for {email}")

    if created == 0:
        logger.info("Seed: no new admin users needed")
    else:
        logger.info(f"Seed: {created} admin user(s) created")
    return created
