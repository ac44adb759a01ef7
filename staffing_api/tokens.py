"""
Bearer token service.

Tokens are stateless HS256 JWTs carrying the subject id (`sub`) and the
subject name (`name`). Nothing is stored server-side: a token is valid
exactly as long as its signature checks out and `exp` has not passed.
There is no revocation, so deleting a client does not invalidate tokens
already issued for it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from staffing_api import config
from staffing_api.errors import InvalidToken, TokenExpired

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


@dataclass(frozen=True)
class Credential:
    """A freshly issued token and the moment it stops being accepted."""
    token: str
    expires_at: datetime
    token_type: str = "Bearer"


@dataclass(frozen=True)
class Claims:
    """Identity asserted by a verified token."""
    subject_id: str
    subject_name: str | None


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_seconds: int = 3600,
    ):
        if len(secret_key) < 32:
            raise ValueError("Secret key must be at least 32 characters")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires = timedelta(seconds=expires_seconds)

    def issue(
        self,
        subject_id: str,
        subject_name: str | None,
        issued_at: datetime | None = None,
    ) -> Credential:
        """Sign a token for `subject_id`, valid for `expires` from `issued_at` (default: now)."""
        if not subject_id:
            raise ValueError("subject_id required")

        now = issued_at or datetime.now(timezone.utc)
        expires_at = now + self.expires
        payload = {
            "sub": str(subject_id),
            "name": subject_name,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

        logger.info("Token issued for %s (expires %s)", subject_id, expires_at.isoformat())
        return Credential(token=token, expires_at=expires_at)

    def verify(self, token: str) -> Claims:
        """Check signature and expiry and return the embedded identity.

        Raises:
            TokenExpired: `exp` is in the past
            InvalidToken: anything else wrong with the token
        """
        if not token or not isinstance(token, str):
            raise InvalidToken("Token must be a non-empty string")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired(f"Token expired: {e}") from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken(f"Invalid token: {e}") from e

        return Claims(subject_id=payload["sub"], subject_name=payload.get("name"))


_service: TokenService | None = None


def get_token_service() -> TokenService:
    """Process-wide TokenService built from config."""
    global _service
    if _service is None:
        if config.JWT_SECRET == config.DEFAULT_JWT_SECRET:
            logger.warning(
                "Using the built-in development signing key. "
                "Set STAFFING_JWT_SECRET before exposing this service."
            )
        _service = TokenService(
            config.JWT_SECRET,
            algorithm=config.JWT_ALGORITHM,
            expires_seconds=config.JWT_EXPIRES_SECONDS,
        )
    return _service
