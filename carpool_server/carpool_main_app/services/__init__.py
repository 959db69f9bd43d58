"""Services package - business logic layer"""

from .auth_service import AuthService
from .fare_service import FareOptions, round2
from .matching_service import RideMatchingService, matches_criteria
from .message_service import MessageService
from .notification_service import NotificationService
from .rating_service import RatingService
from .ride_service import RideService

__all__ = [
    'AuthService',
    'FareOptions',
    'round2',
    'RideMatchingService',
    'matches_criteria',
    'MessageService',
    'NotificationService',
    'RatingService',
    'RideService',
]
