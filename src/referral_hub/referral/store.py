"""Persistence for referral records."""

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from referral_hub.exceptions import StorageError
from referral_hub.logging_config import get_logger
from referral_hub.referral.models import Referral, ReferralStatus
from referral_hub.referral.schemas import ReferralSubmission
from referral_hub.storage.db import Database

logger = get_logger(__name__)


class ReferralStore:
    """Append-and-read store for referrals.

    Records are created once and never updated or deleted.
    """

    def __init__(self, database: Database):
        self.db = database

    def create(self, submission: ReferralSubmission) -> Referral:
        """Persist a new PENDING referral.

        Args:
            submission: Validated, trimmed submission

        Returns:
            Stored referral including generated id and timestamps

        Raises:
            StorageError: If the database is unreachable or rejects the write
        """
        now = datetime.now(timezone.utc)
        referral = Referral(
            referrer_name=submission.your_name,
            referrer_email=submission.your_email,
            referrer_phone=submission.your_phone,
            friend_name=submission.friend_name,
            friend_email=submission.friend_email,
            friend_phone=submission.friend_phone,
            program=submission.program,
            status=ReferralStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        try:
            with self.db.session() as session:
                session.add(referral)
                session.flush()
                session.refresh(referral)
        except SQLAlchemyError as e:
            logger.error("referral_create_failed", error=str(e))
            raise StorageError("Could not store referral") from e

        logger.info("referral_created", referral_id=referral.id, program=referral.program)
        return referral

    def list_all(self) -> list[Referral]:
        """List every referral, most recent first.

        Raises:
            StorageError: If the database is unreachable
        """
        stmt = select(Referral).order_by(Referral.created_at.desc(), Referral.id.desc())
        try:
            with self.db.session() as session:
                return list(session.scalars(stmt))
        except SQLAlchemyError as e:
            logger.error("referral_list_failed", error=str(e))
            raise StorageError("Could not list referrals") from e

    def count(self) -> int:
        """Number of stored referrals."""
        try:
            with self.db.session() as session:
                return session.scalar(select(func.count()).select_from(Referral)) or 0
        except SQLAlchemyError as e:
            raise StorageError("Could not count referrals") from e
