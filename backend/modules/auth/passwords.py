"""
Password hashing with bcrypt.

The work factor comes from BCRYPT_ROUNDS and is clamped to [8, 12]: below 8
hashes are too cheap to brute-force offline, above 12 a login costs
seconds of CPU.
"""

import logging
from typing import Optional, Union

import bcrypt

from shared.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10
MIN_ROUNDS = 8
MAX_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def resolve_rounds(raw: Union[str, int, None]) -> int:
    """
    Turn a configured cost into a usable bcrypt work factor.

    Non-numeric values fall back to the default, numeric values are
    floored and clamped to [MIN_ROUNDS, MAX_ROUNDS].
    """
    if raw is None:
        return DEFAULT_ROUNDS
    try:
        rounds = int(float(raw))
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric bcrypt cost {raw!r}, using {DEFAULT_ROUNDS}")
        return DEFAULT_ROUNDS
    return min(MAX_ROUNDS, max(MIN_ROUNDS, rounds))


class PasswordHasher:
    """Salted, slow one-way hashing for user passwords."""

    def __init__(self, rounds: Union[str, int, None] = DEFAULT_ROUNDS):
        self.rounds = resolve_rounds(rounds)
        self._dummy_hash: Optional[str] = None

    def hash(self, password: str) -> str:
        """
        Hash a password.

        Returns:
            The bcrypt hash string (algorithm, cost, salt and digest)

        Raises:
            ValidationError: If the password exceeds 72 bytes once encoded
        """
        encoded = str(password).encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                details={"field": "password"},
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Verify a password against its hash.

        Returns False for a mismatch, an oversized password, or a
        malformed stored hash.
        """
        encoded = str(password).encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES or not password_hash:
            return False
        try:
            return bcrypt.checkpw(encoded, str(password_hash).encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    def verify_dummy(self, password: str) -> bool:
        """
        Run a full bcrypt check against a throwaway hash of the same cost.

        Used when there is no stored hash, so an unknown account costs as
        much time as a wrong password. Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("no-such-account")
        self.verify(password, self._dummy_hash)
        return False
