"""Mail relay transports.

Each transport delivers one message per call and raises NotificationError
when the relay does not accept it. Nothing is retried or queued.
"""

import asyncio
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Protocol

import httpx

from referral_hub.exceptions import NotificationError
from referral_hub.logging_config import get_logger
from referral_hub.settings import Settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class OutgoingEmail:
    """A rendered message ready for delivery."""

    to: str
    subject: str
    html: str
    text: str | None = None


class MailTransport(Protocol):
    async def send(self, message: OutgoingEmail) -> None: ...


class SMTPTransport:
    """SMTP relay with STARTTLS and static login credentials."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str | None,
        password: str | None,
        from_name: str | None = None,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_name = from_name

    def _build_message(self, message: OutgoingEmail) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = formataddr((self.from_name, self.username)) if self.from_name else self.username
        msg["To"] = message.to
        msg["Subject"] = message.subject
        msg.set_content(message.text or "")
        msg.add_alternative(message.html, subtype="html")
        return msg

    def _send_sync(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port) as server:
            server.starttls()
            server.login(self.username, self.password)
            server.send_message(msg)

    async def send(self, message: OutgoingEmail) -> None:
        if not (self.username and self.password):
            raise NotificationError("SMTP credentials are not configured")

        try:
            # Header values with CR/LF raise ValueError
            msg = self._build_message(message)
            # smtplib blocks; keep it off the event loop
            await asyncio.to_thread(self._send_sync, msg)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error("email_send_error", transport="smtp", to=message.to, error=str(e))
            raise NotificationError(f"SMTP error: {e}") from e

        logger.info("email_sent", transport="smtp", to=message.to, subject=message.subject)


class SendGridTransport:
    """SendGrid v3 mail API."""

    SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"

    def __init__(
        self,
        api_key: str | None,
        from_email: str | None,
        from_name: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self._client = client

    def _payload(self, message: OutgoingEmail) -> dict:
        sender = {"email": self.from_email}
        if self.from_name:
            sender["name"] = self.from_name

        payload = {
            "personalizations": [
                {
                    "to": [{"email": message.to}],
                    "subject": message.subject,
                }
            ],
            "from": sender,
            "content": [
                {"type": "text/html", "value": message.html},
            ],
        }
        if message.text:
            payload["content"].insert(0, {"type": "text/plain", "value": message.text})
        return payload

    async def _post(self, client: httpx.AsyncClient, message: OutgoingEmail) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        return await client.post(
            self.SENDGRID_API_URL,
            json=self._payload(message),
            headers=headers,
        )

    async def send(self, message: OutgoingEmail) -> None:
        if not (self.api_key and self.from_email):
            raise NotificationError("SendGrid credentials are not configured")

        try:
            if self._client is not None:
                response = await self._post(self._client, message)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, message)
        except httpx.RequestError as e:
            logger.error("email_send_error", transport="sendgrid", to=message.to, error=str(e))
            raise NotificationError(f"SendGrid request failed: {e}") from e

        if response.status_code not in (200, 201, 202):
            logger.error(
                "email_send_failed",
                transport="sendgrid",
                to=message.to,
                status=response.status_code,
                body=response.text[:200],
            )
            raise NotificationError(f"SendGrid rejected message with status {response.status_code}")

        logger.info("email_sent", transport="sendgrid", to=message.to, subject=message.subject)


class ConsoleTransport:
    """Logs messages instead of sending them. For local development."""

    async def send(self, message: OutgoingEmail) -> None:
        logger.info("email_logged", to=message.to, subject=message.subject, body=message.text)


def build_transport(settings: Settings) -> MailTransport:
    """Create the transport selected by MAIL_TRANSPORT."""
    kind = settings.mail_transport.lower()
    if kind == "smtp":
        return SMTPTransport(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_pass,
            from_name=settings.mail_from_name,
        )
    if kind == "sendgrid":
        return SendGridTransport(
            api_key=settings.sendgrid_api_key,
            from_email=settings.email_user,
            from_name=settings.mail_from_name,
        )
    if kind == "console":
        return ConsoleTransport()
    raise ValueError(f"Unknown mail transport: {settings.mail_transport}")
