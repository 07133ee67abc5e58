"""
Confirmation token issuer - Signed, time-bound email confirmation tokens.

Tokens are HS256 JWTs asserting an (account id, email) pair. They are
signed, not encrypted: anyone can read the claims, only the holder of the
signing secret can produce them. A short numeric confirmation code is
issued alongside as a human-typable secondary channel.
"""

import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from .exceptions import InvalidConfirmationToken

CONFIRMATION_CODE_MIN = 10_000_000
CONFIRMATION_CODE_MAX = 99_999_999


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ConfirmationClaims:
    account_id: int
    email: str


@dataclass(frozen=True)
class ConfirmationTokenIssuer:
    """
    Issues and decodes email confirmation tokens.

    The signing secret is process-wide and read-only after startup,
    so one instance can be shared across concurrent requests.
    """

    secret: str
    algorithm: str = "HS256"
    ttl_hours: int = 12
    clock: Callable[[], datetime] = field(default=_utcnow, repr=False)

    def issue(self, account_id: int, email: str, issued_at: datetime | None = None) -> str:
        """
        Sign a token for the given account and email.

        The validity window (ttl_hours) is encoded in the exp claim. Pass
        issued_at to share one clock reading with expiry_for().
        """
        if issued_at is None:
            issued_at = self.clock()
        claims = {
            "userId": account_id,
            "userEmail": email,
            "iat": issued_at,
            "exp": self.expiry_for(issued_at),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def expiry_for(self, issued_at: datetime) -> datetime:
        """Deadline of a token issued at issued_at."""
        return issued_at + timedelta(hours=self.ttl_hours)

    def decode(self, token: str) -> ConfirmationClaims:
        """
        Verify signature and expiry, and return the asserted pair.

        Raises:
            InvalidConfirmationToken: Bad signature, expired or missing claims
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidConfirmationToken(str(e)) from e

        try:
            return ConfirmationClaims(
                account_id=int(payload["userId"]),
                email=str(payload["userEmail"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfirmationToken("Token is missing confirmation claims") from e

    def generate_confirmation_code(self) -> int:
        """Uniformly random 8-digit code in [10_000_000, 99_999_999]."""
        span = CONFIRMATION_CODE_MAX - CONFIRMATION_CODE_MIN + 1
        return CONFIRMATION_CODE_MIN + secrets.randbelow(span)

    def compute_expiry(self, hours: int) -> datetime:
        """Current time plus the given number of hours."""
        return self.clock() + timedelta(hours=hours)
