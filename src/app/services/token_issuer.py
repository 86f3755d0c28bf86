"""
Token Issuer

Issues short-lived signed access tokens and long-lived opaque refresh tokens.
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from src.domain.entities import SubjectType

# 32 random bytes = 256 bits of entropy
REFRESH_TOKEN_BYTES = 32
FINGERPRINT_LENGTH = 8


@dataclass(frozen=True)
class AccessTokenClaims:
    subject_id: UUID
    role: str
    subject_type: SubjectType
    email: Optional[str] = None


@dataclass(frozen=True)
class RefreshToken:
    """Secret goes to the client cookie; only token_hash is ever stored."""

    secret: str
    token_hash: str

    @property
    def fingerprint(self) -> str:
        return token_fingerprint(self.token_hash)

    def __repr__(self) -> str:
        return f"RefreshToken(fingerprint={self.fingerprint!r})"


def hash_refresh_token(secret: str) -> str:
    """SHA-256 hex digest of a refresh token secret"""
    return hashlib.sha256(secret.encode()).hexdigest()


def token_fingerprint(token_hash: Optional[str]) -> str:
    """Short correlation id for logs, never enough to rebuild the hash"""
    if not token_hash:
        return "-"
    return token_hash[:FINGERPRINT_LENGTH]


class TokenIssuer:
    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_token_ttl: timedelta = timedelta(minutes=30),
        refresh_token_ttl: timedelta = timedelta(days=7),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl

    @property
    def access_token_expires_in(self) -> int:
        """Access token lifetime in seconds"""
        return int(self.access_token_ttl.total_seconds())

    @property
    def refresh_token_max_age(self) -> int:
        """Refresh token lifetime in seconds"""
        return int(self.refresh_token_ttl.total_seconds())

    def refresh_token_expiry(self, now: datetime) -> datetime:
        return now + self.refresh_token_ttl

    def issue_access_token(self, claims: AccessTokenClaims) -> str:
        """
        Issue a signed access token.

        Args:
            claims: Subject id, role, principal type and optional email

        Returns:
            JWT string, expires after access_token_ttl
        """
        now = datetime.now(UTC)
        payload = {
            "user_id": str(claims.subject_id),
            "role": claims.role,
            "type": claims.subject_type.value,
            "iat": now,
            "exp": now + self.access_token_ttl,
        }
        if claims.email:
            payload["email"] = claims.email
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def issue_refresh_token(self) -> RefreshToken:
        secret = secrets.token_hex(REFRESH_TOKEN_BYTES)
        return RefreshToken(secret=secret, token_hash=hash_refresh_token(secret))

    def verify_access_token(self, token: str) -> Optional[dict]:
        """Decoded claims of a valid, unexpired access token, else None"""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None
