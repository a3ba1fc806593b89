"""
Tests for mail relay transports.
"""
import json
import smtplib

import httpx
import pytest
from unittest.mock import MagicMock, patch

from referral_hub.email.transport import (
    ConsoleTransport,
    OutgoingEmail,
    SendGridTransport,
    SMTPTransport,
    build_transport,
)
from referral_hub.exceptions import NotificationError
from referral_hub.settings import Settings


@pytest.fixture
def message():
    return OutgoingEmail(to="bob@x.com", subject="Hi Bob", html="<p>Hi</p>", text="Hi")


class TestSMTPTransport:
    """Tests for SMTPTransport"""

    @pytest.mark.asyncio
    async def test_sends_with_starttls_and_login(self, message):
        transport = SMTPTransport("smtp.test", 587, "team@x.com", "secret", from_name="The Education Team")

        with patch("referral_hub.email.transport.smtplib.SMTP") as smtp_cls:
            server = smtp_cls.return_value.__enter__.return_value
            await transport.send(message)

        smtp_cls.assert_called_once_with("smtp.test", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("team@x.com", "secret")
        sent = server.send_message.call_args[0][0]
        assert sent["To"] == "bob@x.com"
        assert sent["Subject"] == "Hi Bob"
        assert sent["From"] == "The Education Team <team@x.com>"

    @pytest.mark.asyncio
    async def test_relay_error_becomes_notification_error(self, message):
        transport = SMTPTransport("smtp.test", 587, "team@x.com", "secret")

        with patch("referral_hub.email.transport.smtplib.SMTP") as smtp_cls:
            server = smtp_cls.return_value.__enter__.return_value
            server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
            with pytest.raises(NotificationError):
                await transport.send(message)

    @pytest.mark.asyncio
    async def test_linefeed_in_subject_becomes_notification_error(self):
        transport = SMTPTransport("smtp.test", 587, "team@x.com", "secret")
        message = OutgoingEmail(to="bob@x.com", subject="Hi\nBcc: victim@evil.com", html="<p>Hi</p>")

        with patch("referral_hub.email.transport.smtplib.SMTP") as smtp_cls:
            with pytest.raises(NotificationError):
                await transport.send(message)

        smtp_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_credentials(self, message):
        transport = SMTPTransport("smtp.test", 587, None, None)
        with pytest.raises(NotificationError):
            await transport.send(message)


class TestSendGridTransport:
    """Tests for SendGridTransport"""

    @pytest.mark.asyncio
    async def test_posts_payload(self, message):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(202)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            transport = SendGridTransport("SG.key", "team@x.com", "The Education Team", client=client)
            await transport.send(message)

        assert len(requests) == 1
        request = requests[0]
        assert request.headers["Authorization"] == "Bearer SG.key"
        payload = json.loads(request.content)
        assert payload["personalizations"][0]["to"] == [{"email": "bob@x.com"}]
        assert payload["from"] == {"email": "team@x.com", "name": "The Education Team"}
        assert [c["type"] for c in payload["content"]] == ["text/plain", "text/html"]

    @pytest.mark.asyncio
    async def test_rejected_status(self, message):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(401, text="unauthorized")))
        transport = SendGridTransport("SG.key", "team@x.com", client=client)

        with pytest.raises(NotificationError):
            await transport.send(message)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_connection_error(self, message):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = SendGridTransport("SG.key", "team@x.com", client=client)

        with pytest.raises(NotificationError):
            await transport.send(message)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_missing_api_key(self, message):
        with pytest.raises(NotificationError):
            await SendGridTransport(None, "team@x.com").send(message)


@pytest.mark.asyncio
async def test_console_transport_never_fails(message):
    await ConsoleTransport().send(message)


class TestBuildTransport:
    """Tests for build_transport"""

    def test_smtp_default(self):
        transport = build_transport(Settings(_env_file=None, email_user="u@x.com", email_pass="p"))
        assert isinstance(transport, SMTPTransport)
        assert transport.host == "smtp.gmail.com"
        assert transport.port == 587
        assert transport.username == "u@x.com"

    def test_sendgrid(self):
        transport = build_transport(
            Settings(_env_file=None, mail_transport="sendgrid", sendgrid_api_key="SG.key", email_user="u@x.com")
        )
        assert isinstance(transport, SendGridTransport)
        assert transport.from_email == "u@x.com"

    def test_console(self):
        assert isinstance(build_transport(Settings(_env_file=None, mail_transport="Console")), ConsoleTransport)

    def test_unknown(self):
        with pytest.raises(ValueError):
            build_transport(Settings(_env_file=None, mail_transport="pigeon"))
