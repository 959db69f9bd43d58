"""Models package - domain-based organization"""

# User models
from .user import Profile

# Ride models
from .ride import Ride, RidePassenger

# Join-request models
from .request import RideRequest

# Messaging models
from .message import Message, Notification

# Rating models
from .review import Rating

__all__ = [
    'Profile', 'Ride', 'RidePassenger', 'RideRequest', 'Message', 'Notification', 'Rating',
]
