"""Referral intake module.

A referral links a referrer to a friend for a named program. Submissions are
validated, stored as PENDING and announced by email to both parties.
"""

from referral_hub.referral.models import Referral, ReferralStatus
from referral_hub.referral.notifier import ReferralNotifier
from referral_hub.referral.service import ReferralService
from referral_hub.referral.store import ReferralStore

__all__ = ["Referral", "ReferralStatus", "ReferralNotifier", "ReferralService", "ReferralStore"]
