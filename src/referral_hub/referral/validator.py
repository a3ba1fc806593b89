"""Field checks for referral submissions."""

import re

from referral_hub.exceptions import FieldError
from referral_hub.referral.schemas import ReferralSubmission

EMAIL_REGEX = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}")
PHONE_REGEX = re.compile(r"[0-9]{10}")

NAME_REQUIRED = "Your name is required"
FRIEND_NAME_REQUIRED = "Friend's name is required"
INVALID_EMAIL = "Please enter a valid email address"
INVALID_PHONE = "Please enter a valid 10-digit phone number"
PROGRAM_REQUIRED = "Program selection is required"


def is_valid_email(value: str) -> bool:
    return EMAIL_REGEX.fullmatch(value.strip()) is not None


def is_valid_phone(value: str) -> bool:
    """Exactly ten ASCII digits, nothing else."""
    return PHONE_REGEX.fullmatch(value.strip()) is not None


def _required(value: str) -> bool:
    return bool(value.strip())


# Ordered (field, attribute, check, message) rules; each one runs independently
RULES = [
    ("yourName", "your_name", _required, NAME_REQUIRED),
    ("yourEmail", "your_email", is_valid_email, INVALID_EMAIL),
    ("yourPhone", "your_phone", is_valid_phone, INVALID_PHONE),
    ("friendName", "friend_name", _required, FRIEND_NAME_REQUIRED),
    ("friendEmail", "friend_email", is_valid_email, INVALID_EMAIL),
    ("friendPhone", "friend_phone", is_valid_phone, INVALID_PHONE),
    ("program", "program", _required, PROGRAM_REQUIRED),
]


def validate_submission(submission: ReferralSubmission) -> list[FieldError]:
    """Run every rule against a submission.

    Args:
        submission: Parsed referral form

    Returns:
        All failed checks in field order; empty when the submission is valid
    """
    errors = []
    for field, attr, check, message in RULES:
        if not check(getattr(submission, attr)):
            errors.append(FieldError(field=field, message=message))
    return errors
