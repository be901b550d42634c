# 📄 File: app/modules/notifications/domain/models/mail.py
# 🧭 Purpose (Layman Explanation):
# Describes an email we want to send: who gets it, which kind of email it is,
# and the details (like the customer's name) to fill into it.
# 🧪 Purpose (Technical Summary):
# Mail message value object and the enumeration of transactional email cases.
# 🔗 Dependencies:
# pydantic, enum
# 🔄 Connected Modules / Calls From:
# mail_service.py, user_service.py (welcome email)

from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Cases(str, Enum):
    """Transactional email kinds."""
    CREATE_ACCOUNT = "create_account"


class MailMessage(BaseModel):
    """A single email addressed to one recipient."""

    model_config = ConfigDict(frozen=True)

    addressee: EmailStr
    subject: Cases
    context: Dict[str, str] = Field(default_factory=dict)
