"""
Admin authorization policy.

Admin status has one source of truth: the ADMIN_EMAILS allow-list, checked
against the verified identity on every request. The `is_admin` claim found
in tokens is a hint for clients and is ignored here, so changing the
allow-list takes effect without reissuing tokens.
"""

from typing import Any, Iterable, Optional

from shared.models import IdentityClaims, normalize_email


class AdminPolicy:
    """Pure predicate over verified identity claims."""

    def __init__(self, admin_emails: Iterable[str]):
        self._admins = frozenset(
            normalize_email(e) for e in admin_emails if normalize_email(e)
        )

    @property
    def admin_emails(self) -> frozenset[str]:
        return self._admins

    def is_admin(self, claims: Optional[Any]) -> bool:
        """
        Decide whether the caller has admin privileges.

        Never raises: missing or malformed claims are simply not admin.
        """
        if not isinstance(claims, IdentityClaims):
            return False
        identity = claims.identity
        return bool(identity) and identity in self._admins

    def is_admin_email(self, email: str) -> bool:
        """Allow-list lookup by email; used to derive the token hint."""
        return normalize_email(email) in self._admins
