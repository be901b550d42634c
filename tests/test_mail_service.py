"""Tests for email rendering, delivery retries and background dispatch."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from app.modules.notifications.domain.models.mail import Cases, MailMessage
from app.modules.notifications.domain.services.mail_service import (
    MailService,
    NotificationDispatcher,
    render,
)
from app.modules.notifications.infrastructure.external.mail_client import HttpMailClient, TransientMailError
from app.shared.config.settings import get_settings
from app.shared.core.exceptions import ExternalServiceError

CLIENT_SESSION = "app.modules.notifications.infrastructure.external.mail_client.aiohttp.ClientSession"


@pytest.fixture
def message() -> MailMessage:
    return MailMessage(
        addressee="ada@example.com",
        subject=Cases.CREATE_ACCOUNT,
        context={"first_name": "Ada", "last_name": "Lovelace"},
    )


@pytest.fixture
def provider_settings():
    return get_settings().model_copy(update={
        "MAIL_API_URL": "https://mail.example.com/v3/send",
        "MAIL_API_KEY": "test-key",
        "MAIL_FROM": "shop@example.com",
    })


class FakeResponse:
    def __init__(self, status: int, text: str = ""):
        self.status = status
        self._text = text

    async def text(self) -> str:
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession, recording the posted request."""

    def __init__(self, response: FakeResponse):
        self.response = response
        self.requests = []

    def post(self, url, json=None, headers=None):
        self.requests.append({"url": url, "json": json, "headers": headers})
        return self.response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


def mail_service(client) -> MailService:
    return MailService(client=client, attempts=2, retry_wait_seconds=0)


class TestRender:

    def test_welcome_email(self, message):
        subject, body = render(message)

        assert subject == "Welcome to the store!"
        assert "Hi Ada Lovelace" in body

    def test_missing_placeholder(self):
        incomplete = MailMessage(
            addressee="ada@example.com",
            subject=Cases.CREATE_ACCOUNT,
            context={"first_name": "Ada"},
        )
        with pytest.raises(KeyError):
            render(incomplete)


class TestMailServiceRetries:

    async def test_retries_once_after_transient_failure(self, message):
        client = MagicMock()
        client.send = AsyncMock(side_effect=[TransientMailError("503", service="mail"), None])

        await mail_service(client).send(message)

        assert client.send.await_count == 2

    async def test_gives_up_after_two_attempts(self, message):
        client = MagicMock()
        client.send = AsyncMock(side_effect=TransientMailError("503", service="mail"))

        with pytest.raises(TransientMailError):
            await mail_service(client).send(message)

        assert client.send.await_count == 2

    async def test_permanent_failure_is_not_retried(self, message):
        client = MagicMock()
        client.send = AsyncMock(side_effect=ExternalServiceError("400", service="mail"))

        with pytest.raises(ExternalServiceError):
            await mail_service(client).send(message)

        assert client.send.await_count == 1

    async def test_sends_rendered_message(self, message):
        client = MagicMock()
        client.send = AsyncMock(return_value=None)

        await mail_service(client).send(message)

        to, subject, body = client.send.await_args.args
        assert to == "ada@example.com"
        assert subject == "Welcome to the store!"
        assert "Ada Lovelace" in body


class TestHttpMailClient:

    async def test_unconfigured_provider_skips_delivery(self, caplog):
        client = HttpMailClient(settings=get_settings().model_copy(update={"MAIL_API_URL": None}))

        with patch(CLIENT_SESSION) as session_cls:
            await client.send("ada@example.com", "Hello", "Body")

        session_cls.assert_not_called()
        assert "not configured" in caplog.text

    def test_payload_shape(self, provider_settings):
        payload = HttpMailClient(settings=provider_settings)._build_payload("ada@example.com", "Hello", "Body")

        assert payload["from"] == {"email": "shop@example.com"}
        assert payload["personalizations"] == [{"to": [{"email": "ada@example.com"}], "subject": "Hello"}]
        assert payload["content"] == [{"type": "text/plain", "value": "Body"}]

    async def test_delivers_with_bearer_key(self, provider_settings):
        fake = FakeSession(FakeResponse(202))

        with patch(CLIENT_SESSION, return_value=fake):
            await HttpMailClient(settings=provider_settings).send("ada@example.com", "Hello", "Body")

        request = fake.requests[0]
        assert request["url"] == "https://mail.example.com/v3/send"
        assert request["headers"]["Authorization"] == "Bearer test-key"

    @pytest.mark.parametrize("status", [500, 503, 429])
    async def test_server_errors_are_transient(self, provider_settings, status):
        with patch(CLIENT_SESSION, return_value=FakeSession(FakeResponse(status, "try later"))):
            with pytest.raises(TransientMailError):
                await HttpMailClient(settings=provider_settings).send("ada@example.com", "Hello", "Body")

    @pytest.mark.parametrize("status", [400, 401, 403])
    async def test_client_errors_are_permanent(self, provider_settings, status):
        with patch(CLIENT_SESSION, return_value=FakeSession(FakeResponse(status, "rejected"))):
            with pytest.raises(ExternalServiceError) as exc_info:
                await HttpMailClient(settings=provider_settings).send("ada@example.com", "Hello", "Body")

        assert not isinstance(exc_info.value, TransientMailError)
        assert exc_info.value.details["service_response"] == "rejected"

    async def test_network_errors_are_transient(self, provider_settings):
        with patch(CLIENT_SESSION, side_effect=aiohttp.ClientConnectionError("refused")):
            with pytest.raises(TransientMailError):
                await HttpMailClient(settings=provider_settings).send("ada@example.com", "Hello", "Body")

    async def test_timeouts_are_transient(self, provider_settings):
        session = FakeSession(FakeResponse(202))
        session.post = MagicMock(side_effect=asyncio.TimeoutError())

        with patch(CLIENT_SESSION, return_value=session):
            with pytest.raises(TransientMailError):
                await HttpMailClient(settings=provider_settings).send("ada@example.com", "Hello", "Body")

    async def test_timeout_is_retried_once(self, provider_settings, message):
        sessions = [FakeSession(FakeResponse(202)), FakeSession(FakeResponse(202))]
        sessions[0].post = MagicMock(side_effect=asyncio.TimeoutError())
        client = HttpMailClient(settings=provider_settings)

        with patch(CLIENT_SESSION, side_effect=sessions):
            await mail_service(client).send(message)

        assert sessions[0].post.call_count == 1
        assert len(sessions[1].requests) == 1


class TestNotificationDispatcher:

    async def test_delivers_in_background(self, message):
        service = MagicMock()
        service.send = AsyncMock(return_value=None)
        dispatcher = NotificationDispatcher(mail_service=service)

        dispatcher.dispatch(message)
        await dispatcher.drain()

        service.send.assert_awaited_once_with(message)
        assert dispatcher.pending == 0

    async def test_failures_are_logged_not_raised(self, message, caplog):
        service = MagicMock()
        service.send = AsyncMock(side_effect=TransientMailError("503", service="mail"))
        dispatcher = NotificationDispatcher(mail_service=service)

        with caplog.at_level(logging.ERROR):
            task = dispatcher.dispatch(message)
            await dispatcher.drain()

        assert task.exception() is None
        assert "Failed to deliver 'create_account' email to ada@example.com" in caplog.text

    async def test_drain_without_tasks(self):
        await NotificationDispatcher(mail_service=MagicMock()).drain()
