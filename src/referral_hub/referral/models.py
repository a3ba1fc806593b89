"""Referral database model."""

import enum
from datetime import datetime, timezone

from sqlalchemy import Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from referral_hub.storage.db import Base, UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReferralStatus(str, enum.Enum):
    """Referral workflow status.

    Only PENDING is ever written by this service; the remaining values are
    reserved for the follow-up workflow.
    """

    PENDING = "PENDING"
    CONTACTED = "CONTACTED"
    ENROLLED = "ENROLLED"
    REWARDED = "REWARDED"


class Referral(Base):
    """A referrer recommending a friend for a program."""

    __tablename__ = "referrals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Referrer (the submitter)
    referrer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    referrer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    referrer_phone: Mapped[str] = mapped_column(String(20), nullable=False)

    # Referred friend
    friend_name: Mapped[str] = mapped_column(String(255), nullable=False)
    friend_email: Mapped[str] = mapped_column(String(255), nullable=False)
    friend_phone: Mapped[str] = mapped_column(String(20), nullable=False)

    program: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[ReferralStatus] = mapped_column(
        Enum(ReferralStatus, name="referral_status", native_enum=False, length=20),
        default=ReferralStatus.PENDING,
        nullable=False,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=_utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Referral(id={self.id}, program='{self.program}', status={self.status.value})>"
