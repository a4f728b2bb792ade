"""
Security utilities.

This module contains password hashing and the session token service.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from weatherdash.config import Settings
from weatherdash.errors import InvalidTokenError
from weatherdash.utils.logging_config import get_logger

logger = get_logger(__name__)

# Password hashing context, fixed work factor
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)


def get_password_hash(password: str) -> str:
    """
    Hash a password.

    Args:
        password: Plain text password

    Returns:
        Salted bcrypt hash
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password

    Returns:
        True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognised or corrupt hash
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""
    user_id: int
    email: str


class TokenService:
    """
    Issues and verifies signed, time-limited session tokens.

    Tokens are HS256 JWTs carrying ``sub``/``userId`` and ``email``.
    """

    def __init__(self, settings: Settings):
        self._secret = settings.SECRET_KEY
        self._algorithm = settings.ALGORITHM
        self._lifetime = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def issue(self, user, issued_at: Optional[datetime] = None) -> str:
        """
        Create a signed token for a user.

        Args:
            user: Object with ``id`` and ``email`` attributes
            issued_at: Issue time, defaults to now

        Returns:
            Encoded JWT
        """
        iat = issued_at or datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "userId": user.id,
            "email": user.email,
            "iat": int(iat.timestamp()),
            "exp": int((iat + self._lifetime).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify and decode a token.

        Args:
            token: Encoded JWT

        Returns:
            TokenClaims for the embedded user

        Raises:
            InvalidTokenError: If the token is malformed, forged or expired
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidTokenError() from e

        try:
            user_id = int(payload["sub"])
            email = str(payload["email"])
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Token rejected: missing or invalid claims ({e})")
            raise InvalidTokenError() from e

        return TokenClaims(user_id=user_id, email=email)
