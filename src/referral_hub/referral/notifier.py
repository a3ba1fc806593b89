"""Referral notification emails."""

from html import escape
from urllib.parse import quote

from referral_hub.email.transport import MailTransport, OutgoingEmail
from referral_hub.logging_config import get_logger
from referral_hub.referral.models import Referral

logger = get_logger(__name__)

REFERRER_SUBJECT = "Thank you for your referral!"

_CARD_STYLE = (
    "font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; "
    "padding: 20px; border: 1px solid #eaeaea; border-radius: 5px;"
)
_BUTTON_STYLE = (
    "background-color: #4CAF50; color: white; padding: 12px 20px; "
    "text-decoration: none; border-radius: 4px; font-weight: bold;"
)


class ReferralNotifier:
    """Tells the friend about the referral and thanks the referrer.

    The friend email goes out first, then the referrer confirmation. The
    first delivery failure propagates and the second email is not attempted.
    """

    def __init__(self, transport: MailTransport, website_url: str = "https://example.com"):
        self.transport = transport
        self.website_url = website_url.rstrip("/")

    def program_url(self, program: str) -> str:
        encoded = quote(program, safe="!'()*")
        return f"{self.website_url}/programs/{encoded}"

    def friend_email(self, referral: Referral) -> OutgoingEmail:
        referrer = escape(referral.referrer_name)
        friend = escape(referral.friend_name)
        program = escape(referral.program)
        url = escape(self.program_url(referral.program))

        html = f"""
        <div style="{_CARD_STYLE}">
          <h2 style="color: #333;">You've Been Referred!</h2>
          <p>Hello {friend},</p>
          <p>Your friend <strong>{referrer}</strong> has referred you to our <strong>{program}</strong> program.</p>
          <p>We'd love to tell you more about this opportunity. One of our advisors will contact you soon to discuss how this program can benefit your career.</p>
          <div style="margin: 30px 0; text-align: center;">
            <a href="{url}" style="{_BUTTON_STYLE}">Learn More About The Program</a>
          </div>
          <p>If you have any immediate questions, feel free to contact us.</p>
          <p>Best regards,<br>The Education Team</p>
        </div>
        """

        text = f"""
Hello {referral.friend_name},

Your friend {referral.referrer_name} has referred you to our {referral.program} program.

One of our advisors will contact you soon to discuss how this program can benefit your career.

Learn more: {self.program_url(referral.program)}

Best regards,
The Education Team
        """

        return OutgoingEmail(
            to=referral.friend_email,
            subject=f"{referral.referrer_name} has referred you to our {referral.program} program!",
            html=html,
            text=text.strip(),
        )

    def referrer_email(self, referral: Referral) -> OutgoingEmail:
        referrer = escape(referral.referrer_name)
        friend = escape(referral.friend_name)
        program = escape(referral.program)

        html = f"""
        <div style="{_CARD_STYLE}">
          <h2 style="color: #333;">Referral Received!</h2>
          <p>Hello {referrer},</p>
          <p>Thank you for referring <strong>{friend}</strong> to our <strong>{program}</strong> program.</p>
          <p>We've sent them an email and will be reaching out to them shortly. Once they enroll, you'll receive your referral reward!</p>
          <p>Thank you for spreading the word about our programs.</p>
          <p>Best regards,<br>The Education Team</p>
        </div>
        """

        text = f"""
Hello {referral.referrer_name},

Thank you for referring {referral.friend_name} to our {referral.program} program.

We've sent them an email and will be reaching out to them shortly. Once they enroll, you'll receive your referral reward!

Best regards,
The Education Team
        """

        return OutgoingEmail(
            to=referral.referrer_email,
            subject=REFERRER_SUBJECT,
            html=html,
            text=text.strip(),
        )

    async def notify(self, referral: Referral) -> None:
        """Send both referral emails, friend first.

        Raises:
            NotificationError: If the relay rejects either message
        """
        await self.transport.send(self.friend_email(referral))
        logger.info("referral_email_sent", referral_id=referral.id, to=referral.friend_email)

        await self.transport.send(self.referrer_email(referral))
        logger.info("confirmation_email_sent", referral_id=referral.id, to=referral.referrer_email)
