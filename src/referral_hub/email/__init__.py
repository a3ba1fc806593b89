"""Outbound email delivery."""

from referral_hub.email.transport import (
    ConsoleTransport,
    MailTransport,
    OutgoingEmail,
    SendGridTransport,
    SMTPTransport,
    build_transport,
)

__all__ = [
    "ConsoleTransport",
    "MailTransport",
    "OutgoingEmail",
    "SendGridTransport",
    "SMTPTransport",
    "build_transport",
]
