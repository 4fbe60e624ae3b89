"""Signed session tokens."""
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from .exceptions import InvalidTokenError


@dataclass(frozen=True)
class TokenClaims:
    """Identity recovered from a verified token."""

    user_id: uuid.UUID
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """Issue and verify stateless JWT bearer tokens.

    Verification covers signature and expiry only. Whether the token is
    still registered for its user is checked by the authorization gate.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 24 * 60,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(
        self,
        user_id: uuid.UUID,
        expires_delta: Optional[timedelta] = None,
        issued_at: Optional[datetime] = None,
    ) -> str:
        """Create a signed token for ``user_id``."""
        now = issued_at or datetime.now(timezone.utc)
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expire_minutes)

        to_encode = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + expires_delta,
            # Unique per token so two signins in the same second differ
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Verify and decode a token, raising InvalidTokenError on any failure."""
        if not token:
            raise InvalidTokenError("Missing token")

        try:
            payload = jwt.decode(
                token, self.secret_key, algorithms=[self.algorithm]
            )
        except JWTError as exc:
            raise InvalidTokenError(details={"reason": str(exc)}) from exc

        try:
            user_id = uuid.UUID(payload["sub"])
            issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Malformed token") from exc

        # Absolute deadline, independent of decoder leeway
        if expires_at <= datetime.now(timezone.utc):
            raise InvalidTokenError("Token has expired")

        return TokenClaims(user_id=user_id, issued_at=issued_at, expires_at=expires_at)
