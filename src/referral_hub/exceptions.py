"""Exception hierarchy for the referral service."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single user-correctable problem with one submitted field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ReferralHubError(Exception):
    """Base class for all service errors."""


class ValidationError(ReferralHubError):
    """Submission rejected before any side effect.

    Carries every failed field check, in field order.
    """

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors))


class StorageError(ReferralHubError):
    """The persistence medium was unreachable or rejected the operation."""


class NotificationError(ReferralHubError):
    """The mail relay failed to accept a message."""
