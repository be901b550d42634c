"""
Password hashing and session token signing for the storefront.

Stateless primitives behind the credential service: bcrypt via passlib and
HS-family JWTs via python-jose.
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from ..config.settings import Settings, get_settings
from .exceptions import InternalServerError, UnauthorizedError

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "access"
INVALID_TOKEN = "Could not validate credentials"


class SecurityManager:
    """
    Signs and checks session tokens, hashes and checks passwords.

    Configured once from settings; holds no per-user state.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self._secret = settings.JWT_SECRET_KEY
        self._algorithm = settings.JWT_ALGORITHM
        self._token_ttl = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
        self._passwords = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

    # =========================================================================
    # SESSION TOKENS
    # =========================================================================

    def create_access_token(self, claims: Dict[str, Any], ttl: Optional[timedelta] = None) -> str:
        """
        Sign a session token carrying the given claims.

        iat, exp and type are added here; claims must already hold "sub".
        """
        issued_at = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iat": issued_at,
            "exp": issued_at + (ttl if ttl is not None else self._token_ttl),
            "type": SESSION_TOKEN_TYPE,
        }

        try:
            token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except JWTError as e:
            logger.error(f"Could not sign session token for {claims.get('sub')}: {e}")
            raise InternalServerError("Token creation failed", operation="create_access_token") from e

        return token

    def verify_token(self, token: str, token_type: str = SESSION_TOKEN_TYPE) -> Dict[str, Any]:
        """
        Decode a token after checking signature, expiry, type and subject.

        Raises:
            UnauthorizedError: If any of those checks fails
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as e:
            logger.warning(f"Rejected session token: {e}")
            raise UnauthorizedError(INVALID_TOKEN)

        if claims.get("type") != token_type:
            logger.warning(f"Rejected session token of type {claims.get('type')!r}")
            raise UnauthorizedError(INVALID_TOKEN)
        if not claims.get("sub"):
            logger.warning("Rejected session token without subject")
            raise UnauthorizedError(INVALID_TOKEN)

        return claims

    # =========================================================================
    # PASSWORDS
    # =========================================================================

    def get_password_hash(self, password: str) -> str:
        try:
            return self._passwords.hash(password)
        except (ValueError, TypeError) as e:
            logger.error(f"Password hashing failed: {e}")
            raise InternalServerError("Password processing failed", operation="hash_password") from e

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Constant-time comparison; an unreadable hash never matches."""
        try:
            return self._passwords.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.error(f"Stored password hash could not be read: {e}")
            return False


@lru_cache()
def get_security_manager() -> SecurityManager:
    return SecurityManager()
