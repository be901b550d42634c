# 📄 File: app/modules/notifications/infrastructure/external/mail_client.py
#
# 🧭 Purpose (Layman Explanation):
# Talks to the outside email provider over the internet to actually deliver our emails.
#
# 🧪 Purpose (Technical Summary):
# Async HTTP mail provider client built on aiohttp, classifying provider responses
# into delivered, transient failure and permanent failure.
#
# 🔗 Dependencies:
# - aiohttp (async HTTP client)
# - app.shared.config.settings (provider URL, key, sender, timeout)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.notifications.domain.services.mail_service

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientTimeout

from app.shared.config.settings import Settings, get_settings
from app.shared.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class TransientMailError(ExternalServiceError):
    """Provider failure worth retrying (5xx, 429, network errors)."""


class HttpMailClient:
    """
    Sends plain-text emails through an HTTP mail provider API.

    The payload shape follows the common personalizations/content layout
    accepted by most providers.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def configured(self) -> bool:
        return self.settings.mail_enabled

    def _build_payload(self, to: str, subject: str, body: str) -> Dict[str, Any]:
        return {
            "from": {"email": self.settings.MAIL_FROM},
            "personalizations": [{"to": [{"email": to}], "subject": subject}],
            "content": [{"type": "text/plain", "value": body}],
        }

    async def send(self, to: str, subject: str, body: str) -> None:
        """
        Deliver one email.

        Raises:
            TransientMailError: On network errors, 5xx and 429 responses
            ExternalServiceError: On any other non-2xx response
        """
        if not self.configured:
            logger.warning(f"Mail provider not configured; skipping email to {to}")
            return

        headers = {
            "Authorization": f"Bearer {self.settings.MAIL_API_KEY}",
            "Content-Type": "application/json",
        }
        timeout = ClientTimeout(total=self.settings.MAIL_TIMEOUT_SECONDS)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.settings.MAIL_API_URL,
                    json=self._build_payload(to, subject, body),
                    headers=headers,
                ) as response:
                    status = response.status
                    text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransientMailError(f"Mail provider unreachable: {e}", service="mail")

        if 200 <= status < 300:
            logger.info(f"Email '{subject}' delivered to {to}")
            return

        if status >= 500 or status == 429:
            raise TransientMailError(
                f"Mail provider error {status}",
                service="mail",
                service_response=text[:200],
            )

        raise ExternalServiceError(
            f"Mail provider rejected the email ({status})",
            service="mail",
            service_response=text[:200],
        )
