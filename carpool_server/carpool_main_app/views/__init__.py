"""Views package - HTTP request handlers"""

# Import from domain-specific view files
from .user_views import RegisterView, ProfileView
from .ride_views import RideViewSet, RideRequestViewSet, FareEstimateViewSet
from .message_views import MessageViewSet, RatingViewSet, NotificationViewSet

__all__ = [
    'RegisterView', 'ProfileView',
    'RideViewSet', 'RideRequestViewSet', 'FareEstimateViewSet',
    'MessageViewSet', 'RatingViewSet', 'NotificationViewSet',
]
