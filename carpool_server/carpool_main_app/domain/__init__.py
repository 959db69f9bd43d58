"""Domain package - plain records and the error taxonomy"""

from .entities import (
    Location, RidePreferences, UserAccount, Ride, OfferRide, RequestRide,
    build_ride, JoinRequest, Message, Rating, Notification, CreateRideData,
    SearchCriteria, PassengerShare, CostBreakdown, SavingsSummary, UserStats,
)
from .errors import (
    InvalidArgumentError, ErrorCode, ERROR_MESSAGES, GENERIC_ERROR_MESSAGE,
    ServiceResult,
)

__all__ = [
    'Location', 'RidePreferences', 'UserAccount', 'Ride', 'OfferRide',
    'RequestRide', 'build_ride', 'JoinRequest', 'Message', 'Rating',
    'Notification', 'CreateRideData', 'SearchCriteria', 'PassengerShare',
    'CostBreakdown', 'SavingsSummary', 'UserStats',
    'InvalidArgumentError', 'ErrorCode', 'ERROR_MESSAGES',
    'GENERIC_ERROR_MESSAGE', 'ServiceResult',
]
