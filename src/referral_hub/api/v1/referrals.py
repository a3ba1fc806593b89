"""Referral API endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from referral_hub.api.dependencies import get_referral_service
from referral_hub.exceptions import NotificationError, StorageError, ValidationError
from referral_hub.logging_config import get_logger
from referral_hub.referral.schemas import (
    ErrorResponse,
    ReferralCreatedResponse,
    ReferralListResponse,
    ReferralOut,
    ReferralSubmission,
    ValidationErrorResponse,
)
from referral_hub.referral.service import ReferralService

logger = get_logger(__name__)

router = APIRouter(prefix="/referrals", tags=["referrals"])

CREATED_MESSAGE = "Referral submitted successfully"
SUBMIT_FAILED_MESSAGE = "An error occurred while processing your referral. Please try again later."
LIST_FAILED_MESSAGE = "An error occurred while fetching referrals."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ReferralCreatedResponse,
    responses={
        400: {"model": ValidationErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def submit_referral(
    submission: ReferralSubmission | None = None,
    service: ReferralService = Depends(get_referral_service),
):
    """Submit a referral.

    Stores the referral and emails the friend and the referrer.
    """
    try:
        referral = await service.submit(submission or ReferralSubmission())
    except ValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "errors": [err.to_dict() for err in e.errors]},
        )
    except (StorageError, NotificationError) as e:
        logger.error("referral_submit_failed", error_type=type(e).__name__, error=str(e))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, SUBMIT_FAILED_MESSAGE)

    return ReferralCreatedResponse(message=CREATED_MESSAGE, referral_id=referral.id)


@router.get(
    "",
    response_model=ReferralListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_referrals(service: ReferralService = Depends(get_referral_service)):
    """List all referrals, newest first."""
    try:
        referrals = service.list_referrals()
    except StorageError as e:
        logger.error("referral_list_failed", error=str(e))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, LIST_FAILED_MESSAGE)

    return ReferralListResponse(data=[ReferralOut.model_validate(r) for r in referrals])
