"""Serializers package - imports from domain-specific modules"""

# User serializers
from .user_serializers import (
    UserSerializer,
    ProfileSerializer,
    RegisterSerializer,
    UserStatsSerializer,
)

# Ride serializers
from .ride_serializers import (
    LocationSerializer,
    RidePreferencesSerializer,
    RideSerializer,
    RideCreateSerializer,
    RideSearchSerializer,
    CostBreakdownSerializer,
    JoinRideSerializer,
    JoinRequestSerializer,
    FareEstimateSerializer,
)

# Message, rating and notification serializers
from .message_serializers import (
    MessageSerializer,
    MessageCreateSerializer,
    ConversationQuerySerializer,
    RatingSerializer,
    RatingCreateSerializer,
    NotificationSerializer,
)

__all__ = [
    'UserSerializer',
    'ProfileSerializer',
    'RegisterSerializer',
    'UserStatsSerializer',
    'LocationSerializer',
    'RidePreferencesSerializer',
    'RideSerializer',
    'RideCreateSerializer',
    'RideSearchSerializer',
    'CostBreakdownSerializer',
    'JoinRideSerializer',
    'JoinRequestSerializer',
    'FareEstimateSerializer',
    'MessageSerializer',
    'MessageCreateSerializer',
    'ConversationQuerySerializer',
    'RatingSerializer',
    'RatingCreateSerializer',
    'NotificationSerializer',
]
