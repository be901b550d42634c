# 📄 File: app/modules/user_management/domain/services/credential_service.py
# 🧭 Purpose (Layman Explanation):
# Scrambles passwords before they are saved, checks a typed password against the saved one,
# and hands out the login pass (token) a customer shows on every later request.
# 🧪 Purpose (Technical Summary):
# Stateless credential service over the shared SecurityManager: bcrypt hashing with
# constant-time verification and JWT session tokens binding a user id and email.
# 🔗 Dependencies:
# app.shared.core.security (passlib, python-jose)
# 🔄 Connected Modules / Calls From:
# user_service.py (create, sign_in), presentation.dependencies (current user)

import logging
from typing import Any, Dict, Optional

from app.shared.core.security import SecurityManager, get_security_manager

logger = logging.getLogger(__name__)


class CredentialService:
    """
    Password and session token operations used by the user lifecycle.

    Tokens are never persisted; they are verified by signature and expiry only.
    """

    def __init__(self, security_manager: Optional[SecurityManager] = None):
        self.security = security_manager or get_security_manager()

    def hash_password(self, plain_password: str) -> str:
        return self.security.get_password_hash(plain_password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Compare a plaintext password with a stored bcrypt hash."""
        return self.security.verify_password(plain_password, hashed_password)

    def issue_token(self, user_id: str, email: str) -> str:
        """
        Issue an access token for a user.

        Args:
            user_id: Becomes the "sub" claim
            email: Carried as the "email" claim

        Returns:
            str: Signed JWT
        """
        token = self.security.create_access_token({"sub": str(user_id), "email": email})
        logger.debug(f"Issued session token for user {user_id}")
        return token

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Validate a token and return its claims.

        Raises:
            UnauthorizedError: If the token is malformed, expired or tampered with
        """
        return self.security.verify_token(token, token_type="access")
