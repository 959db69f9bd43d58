"""Error taxonomy for the carpool core.

Fare calculations raise ``InvalidArgumentError`` on bad input. Matching,
rating, ride and message operations never raise for business outcomes:
they return a ``ServiceResult`` carrying an ``ErrorCode`` the caller can
branch on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class InvalidArgumentError(ValueError):
    """Raised when a fare calculation receives malformed or negative input."""
    pass


class ErrorCode(str, Enum):
    NOT_FOUND = 'not_found'
    NO_CAPACITY = 'no_capacity'
    DUPLICATE_REQUEST = 'duplicate_request'
    DUPLICATE_RATING = 'duplicate_rating'
    NOT_PENDING = 'not_pending'
    INVALID_SCORE = 'invalid_score'
    DOMAIN_NOT_ALLOWED = 'domain_not_allowed'
    INVALID_ARGUMENT = 'invalid_argument'
    RIDE_NOT_ACTIVE = 'ride_not_active'
    NOT_AN_OFFER = 'not_an_offer'
    OWN_RIDE = 'own_ride'
    ALREADY_JOINED = 'already_joined'
    DUPLICATE_ACCOUNT = 'duplicate_account'


ERROR_MESSAGES = {
    ErrorCode.NOT_FOUND: 'The requested item could not be found.',
    ErrorCode.NO_CAPACITY: 'No seats are available on this ride.',
    ErrorCode.DUPLICATE_REQUEST: 'You have already requested to join this ride.',
    ErrorCode.DUPLICATE_RATING: 'You have already rated this user for this ride.',
    ErrorCode.NOT_PENDING: 'This request has already been handled.',
    ErrorCode.INVALID_SCORE: 'Ratings must be a whole number from 1 to 5.',
    ErrorCode.DOMAIN_NOT_ALLOWED: 'Please register with your university email address.',
    ErrorCode.INVALID_ARGUMENT: 'Some of the submitted values are invalid.',
    ErrorCode.RIDE_NOT_ACTIVE: 'This ride is no longer active.',
    ErrorCode.NOT_AN_OFFER: 'Only ride offers can be joined.',
    ErrorCode.OWN_RIDE: 'You cannot join your own ride.',
    ErrorCode.ALREADY_JOINED: 'You are already a passenger on this ride.',
    ErrorCode.DUPLICATE_ACCOUNT: 'An account with this email already exists.',
}

GENERIC_ERROR_MESSAGE = 'An unexpected error occurred'


@dataclass
class ServiceResult:
    """Result object for service operations."""
    success: bool
    value: Any = None
    error_code: Optional[ErrorCode] = None
    message: str = ''

    @classmethod
    def ok(cls, value=None, message=''):
        return cls(success=True, value=value, message=message)

    @classmethod
    def fail(cls, error_code, message=None):
        return cls(
            success=False,
            error_code=error_code,
            message=message or ERROR_MESSAGES[error_code],
        )
