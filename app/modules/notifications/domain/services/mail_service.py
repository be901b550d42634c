# 📄 File: app/modules/notifications/domain/services/mail_service.py
#
# 🧭 Purpose (Layman Explanation):
# Writes the text of our emails (like the "welcome to the store" message) and sends them in the
# background, trying once more if the email provider hiccups, without ever holding up the customer.
#
# 🧪 Purpose (Technical Summary):
# Mail rendering and delivery with a bounded tenacity retry, plus a fire-and-forget dispatcher
# that runs deliveries as tracked asyncio tasks after the business transaction has committed.
#
# 🔗 Dependencies:
# - tenacity (bounded retry with backoff)
# - app.modules.notifications.infrastructure.external.mail_client (HTTP provider)
# - app.shared.config.settings (retry attempts)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.domain.services.user_service (welcome email)
# - app.main (dispatcher drained on shutdown)

import asyncio
import logging
from typing import Dict, Optional, Set, Tuple

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..models.mail import Cases, MailMessage
from app.modules.notifications.infrastructure.external.mail_client import HttpMailClient, TransientMailError
from app.shared.config.settings import get_settings

logger = logging.getLogger(__name__)


# (subject line, plain-text body) per email case; bodies use str.format placeholders
TEMPLATES: Dict[Cases, Tuple[str, str]] = {
    Cases.CREATE_ACCOUNT: (
        "Welcome to the store!",
        "Hi {first_name} {last_name},\n\n"
        "Your account has been created. You can now sign in and start shopping.\n",
    ),
}


def render(message: MailMessage) -> Tuple[str, str]:
    """
    Build the subject and body for a message.

    Raises:
        KeyError: If the context lacks a placeholder the template needs
    """
    subject, body = TEMPLATES[message.subject]
    return subject, body.format(**message.context)


class MailService:
    """
    Renders and delivers one email, retrying transient provider failures.

    attempts counts the first try, so attempts=2 means exactly one retry.
    """

    def __init__(
        self,
        client: Optional[HttpMailClient] = None,
        attempts: Optional[int] = None,
        retry_wait_seconds: float = 1.0,
    ):
        self.client = client or HttpMailClient()
        self.attempts = attempts or get_settings().MAIL_RETRY_ATTEMPTS
        self.retry_wait_seconds = retry_wait_seconds

    async def send(self, message: MailMessage) -> None:
        subject, body = render(message)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_exponential(multiplier=self.retry_wait_seconds, max=10),
            retry=retry_if_exception_type(TransientMailError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                await self.client.send(message.addressee, subject, body)


class NotificationDispatcher:
    """
    Fire-and-forget front for MailService.

    dispatch() returns immediately; delivery runs as a background task whose
    failure is logged and never propagated to the caller.
    """

    def __init__(self, mail_service: Optional[MailService] = None):
        self.mail_service = mail_service or MailService()
        self._tasks: Set[asyncio.Task] = set()

    def dispatch(self, message: MailMessage) -> asyncio.Task:
        task = asyncio.create_task(self._deliver(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _deliver(self, message: MailMessage) -> None:
        try:
            await self.mail_service.send(message)
        except Exception as e:
            logger.error(
                f"Failed to deliver '{message.subject.value}' email to {message.addressee}: {e}",
                exc_info=True,
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every in-flight delivery to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


_dispatcher: Optional[NotificationDispatcher] = None


def get_notification_dispatcher() -> NotificationDispatcher:
    """Process-wide dispatcher so in-flight deliveries can be drained on shutdown."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = NotificationDispatcher()
    return _dispatcher
