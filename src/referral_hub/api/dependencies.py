"""FastAPI dependencies."""

from fastapi import Request

from referral_hub.referral.service import ReferralService


def get_referral_service(request: Request) -> ReferralService:
    """Referral service built at app creation."""
    return request.app.state.referral_service
