# 📄 File: app/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in the storefront - their name, email, phone, password and whether
# the account is active - and the rules for changing them.
# 🧪 Purpose (Technical Summary):
# Domain model for the User entity with partial-update and soft activation rules.
# The password hash never leaves the domain through serialization.
# 🔗 Dependencies:
# pydantic, datetime, typing, uuid
# 🔄 Connected Modules / Calls From:
# user_service.py, user_queries.py, user_repository.py, presentation schemas

import uuid
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


# Fields a profile update is allowed to touch
UPDATABLE_FIELDS = ("first_name", "last_name", "email", "phone")


class User(BaseModel):
    """
    User domain model representing a storefront customer account.

    - id (UUID): Unique identifier for each user
    - first_name / last_name (String): Display names
    - email (String): Unique email address, stored lower-case
    - password_hash (String): bcrypt hash, excluded from serialization
    - phone (String): Contact phone
    - is_active (Boolean): Soft-delete flag; gates sign-in and cart ownership
    - cart_id (UUID): Owned cart when the relation was eagerly loaded

    Users are never physically deleted: deactivation replaces deletion.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        from_attributes=True,
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    first_name: str
    last_name: str
    email: EmailStr
    password_hash: str = Field(exclude=True, repr=False)
    phone: str
    is_active: bool = True

    cart_id: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are compared case-insensitively, so store them lower-case."""
        return v.lower().strip()

    @field_validator('password_hash')
    @classmethod
    def validate_password_hash(cls, v: str) -> str:
        if not v:
            raise ValueError('Password hash is required')
        return v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def can_sign_in(self) -> bool:
        return self.is_active

    def apply_patch(self, patch: Dict[str, Any]) -> bool:
        """
        Overwrite profile fields present in the patch.

        Absent keys and None values leave the current value untouched.

        Returns:
            True if at least one field changed
        """
        changed = False
        for field_name in UPDATABLE_FIELDS:
            value = patch.get(field_name)
            if value is None or value == getattr(self, field_name):
                continue
            setattr(self, field_name, value)
            changed = True

        if changed:
            self.updated_at = datetime.now(timezone.utc)
        return changed

    def toggle_active(self) -> bool:
        """
        Flip the activation flag.

        Returns:
            The new value of is_active
        """
        self.is_active = not self.is_active
        self.updated_at = datetime.now(timezone.utc)
        return self.is_active
