"""
Security utilities for authentication and authorization.

Provides password hashing (bcrypt), JWT access tokens and the caller
identity resolved from them.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from emploirapide.config import Settings

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class Role(str, Enum):
    """Account roles. Every role-dependent rule branches on these members."""

    CANDIDATE = "candidate"
    RECRUITER = "recruiter"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller."""

    id: str
    role: Role

    @property
    def is_candidate(self) -> bool:
        return self.role is Role.CANDIDATE

    @property
    def is_recruiter(self) -> bool:
        return self.role is Role.RECRUITER


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def create_access_token(identity: Identity, settings: Settings, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token for an identity.

    Args:
        identity: The user the token is issued to
        settings: Settings holding the signing key and default lifetime
        expires_delta: Optional custom expiration time

    Returns:
        The encoded JWT token string
    """
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {"sub": identity.id, "role": identity.role.value, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> Identity | None:
    """
    Decode and validate a JWT access token.

    Returns:
        The identity carried by the token, or None if the token is invalid,
        expired, or names an unknown role
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except InvalidTokenError:
        return None

    user_id = payload.get("sub")
    try:
        role = Role(payload.get("role"))
    except ValueError:
        return None
    if not user_id:
        return None
    return Identity(id=user_id, role=role)
