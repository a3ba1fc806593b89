"""Referral intake: validate, persist, notify."""

from referral_hub.exceptions import NotificationError, ValidationError
from referral_hub.logging_config import get_logger
from referral_hub.referral.models import Referral
from referral_hub.referral.notifier import ReferralNotifier
from referral_hub.referral.schemas import ReferralSubmission
from referral_hub.referral.store import ReferralStore
from referral_hub.referral.validator import validate_submission

logger = get_logger(__name__)


class ReferralService:
    """Composes the validator, store and notifier for the API."""

    def __init__(self, store: ReferralStore, notifier: ReferralNotifier):
        self.store = store
        self.notifier = notifier

    async def submit(self, submission: ReferralSubmission) -> Referral:
        """Accept a referral.

        A notification failure leaves the stored referral in place as PENDING.

        Raises:
            ValidationError: Submission failed field checks; nothing stored or sent
            StorageError: Referral could not be stored; nothing sent
            NotificationError: Referral stored but an email was not delivered
        """
        submission = submission.trimmed()
        errors = validate_submission(submission)
        if errors:
            logger.info("referral_rejected", fields=[e.field for e in errors])
            raise ValidationError(errors)

        referral = self.store.create(submission)

        try:
            await self.notifier.notify(referral)
        except NotificationError as e:
            logger.error("referral_notification_failed", referral_id=referral.id, error=str(e))
            raise

        return referral

    def list_referrals(self) -> list[Referral]:
        """All referrals, newest first."""
        return self.store.list_all()
