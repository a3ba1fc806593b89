"""Request and response models for the referral API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from referral_hub.referral.models import ReferralStatus


class CamelModel(BaseModel):
    """Model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReferralSubmission(CamelModel):
    """Referral form as posted by the site.

    Every field defaults to an empty string so a missing key is reported by
    the validator with its field message.
    """

    your_name: str = ""
    your_email: str = ""
    your_phone: str = ""
    friend_name: str = ""
    friend_email: str = ""
    friend_phone: str = ""
    program: str = ""

    def trimmed(self) -> "ReferralSubmission":
        """Return a copy with surrounding whitespace removed from every field."""
        return self.model_copy(update={name: value.strip() for name, value in self})


class ReferralOut(CamelModel):
    """Stored referral as returned by the list endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    referrer_name: str
    referrer_email: str
    referrer_phone: str
    friend_name: str
    friend_email: str
    friend_phone: str
    program: str
    status: ReferralStatus
    created_at: datetime
    updated_at: datetime


class FieldErrorOut(BaseModel):
    field: str
    message: str


class ReferralCreatedResponse(CamelModel):
    success: bool = True
    message: str
    referral_id: int


class ReferralListResponse(CamelModel):
    success: bool = True
    data: list[ReferralOut]


class ValidationErrorResponse(CamelModel):
    success: bool = False
    errors: list[FieldErrorOut]


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
