"""
Access token issuance and verification.

Tokens are HS256 JWTs signed with a shared secret. Exactly one algorithm is
accepted on verify, so unsigned ("none") and algorithm-confusion tokens are
rejected by construction. Issuer and audience are only written and checked
when configured.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional, Union

import jwt

from shared.models import IdentityClaims, normalize_email

from .exceptions import ExpiredTokenError, InvalidTokenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(days=7)
CLOCK_SKEW_SECONDS = 5

# Used only when JWT_SECRET is unset. Anyone can forge tokens with it.
INSECURE_DEV_SECRET = "insecure-dev-secret-set-JWT_SECRET"


class TokenService:
    """
    Signs and verifies identity tokens.

    Stateless; a token stays valid until its `exp` regardless of later
    account changes.
    """

    def __init__(
        self,
        secret: str = "",
        issuer: str = "",
        audience: str = "",
        default_ttl: timedelta = DEFAULT_TTL,
    ):
        if not secret:
            logger.error(
                "JWT_SECRET is not set; signing tokens with an insecure development "
                "secret. Anyone can forge tokens. Set JWT_SECRET before deploying."
            )
            secret = INSECURE_DEV_SECRET
        self._secret = secret
        self._issuer = issuer or None
        self._audience = audience or None
        self._default_ttl = default_ttl

    def issue(
        self,
        claims: Union[IdentityClaims, Mapping[str, Any]],
        ttl: Optional[timedelta] = None,
    ) -> str:
        """
        Create a signed token for the given identity.

        Args:
            claims: Identity claims; only sub/email/name/is_admin are used
            ttl: Lifetime of the token, DEFAULT_TTL when omitted. A negative
                ttl yields an already-expired token.

        Returns:
            Encoded JWT string

        Raises:
            InvalidTokenError: If the claims carry no subject
        """
        if isinstance(claims, IdentityClaims):
            data = claims.model_dump(exclude_none=True)
        else:
            data = dict(claims)

        subject = normalize_email(data.get("sub") or data.get("email"))
        if not subject:
            raise InvalidTokenError("Cannot issue a token without a subject")

        now = datetime.now(timezone.utc)
        lifetime = self._default_ttl if ttl is None else ttl

        payload: dict[str, Any] = {
            "sub": subject,
            "email": subject,
            "iat": now,
            "exp": now + lifetime,
        }
        if data.get("name"):
            payload["name"] = data["name"]
        if data.get("is_admin") is not None:
            payload["is_admin"] = bool(data["is_admin"])
        if self._issuer:
            payload["iss"] = self._issuer
        if self._audience:
            payload["aud"] = self._audience

        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> IdentityClaims:
        """
        Decode and validate a token.

        Returns:
            IdentityClaims with normalized sub/email

        Raises:
            ExpiredTokenError: Signature is valid but the token has expired
            InvalidTokenError: Anything else (bad signature, wrong algorithm,
                wrong issuer/audience, malformed, missing subject)
        """
        if not token:
            raise InvalidTokenError("Empty token")

        # Expiry is checked below: a lifetime of zero or less is always expired,
        # otherwise exp gets the same clock-skew tolerance as iat.
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                issuer=self._issuer,
                audience=self._audience,
                leeway=CLOCK_SKEW_SECONDS,
                options={"require": ["exp", "iat", "sub"], "verify_exp": False},
            )
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError):
            raise InvalidTokenError("Token timestamps are malformed")

        if expires_at <= issued_at:
            raise ExpiredTokenError()
        if expires_at + timedelta(seconds=CLOCK_SKEW_SECONDS) <= datetime.now(timezone.utc):
            raise ExpiredTokenError()

        subject = normalize_email(payload.get("sub"))
        if not subject:
            raise InvalidTokenError("Token has an empty subject")

        return IdentityClaims(
            sub=subject,
            email=subject,
            name=payload.get("name"),
            is_admin=payload.get("is_admin"),
            iat=issued_at,
            exp=expires_at,
        )
