"""Centralized constants and business rules"""

class RideType:
    OFFER = 'offer'
    REQUEST = 'request'

    CHOICES = [
        (OFFER, 'Ride Offer'),
        (REQUEST, 'Ride Request'),
    ]

class RideStatus:
    ACTIVE = 'active'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    CHOICES = [
        (ACTIVE, 'Active'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

class RequestStatus:
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

    CHOICES = [
        (PENDING, 'Pending'),
        (APPROVED, 'Approved'),
        (REJECTED, 'Rejected'),
    ]

class GenderPreference:
    MALE = 'male'
    FEMALE = 'female'
    ANY = 'any'

    CHOICES = [
        (MALE, 'male'),
        (FEMALE, 'female'),
        (ANY, 'any'),
    ]

class RatingType:
    DRIVER = 'driver'
    PASSENGER = 'passenger'

    CHOICES = [
        (DRIVER, 'Driver'),
        (PASSENGER, 'Passenger'),
    ]

class MessageType:
    TEXT = 'text'
    SYSTEM = 'system'

    CHOICES = [
        (TEXT, 'Text'),
        (SYSTEM, 'System'),
    ]

class NotificationType:
    RIDE_REQUEST = 'ride_request'
    RIDE_APPROVED = 'ride_approved'
    RIDE_CANCELLED = 'ride_cancelled'
    MESSAGE = 'message'
    RATING = 'rating'

    CHOICES = [
        (RIDE_REQUEST, 'Ride Request'),
        (RIDE_APPROVED, 'Ride Approved'),
        (RIDE_CANCELLED, 'Ride Cancelled'),
        (MESSAGE, 'Message'),
        (RATING, 'Rating'),
    ]

class BusinessRules:
    """Business rules and limits"""
    DEFAULT_REQUESTED_SEATS = 1
    MIN_RATING_SCORE = 1
    MAX_RATING_SCORE = 5
    DEFAULT_FUEL_EFFICIENCY_KM_PER_LITER = 12
    DEFAULT_FUEL_PRICE_PER_LITER = 1.5
    DEFAULT_EXTRA_COST_PER_KM = 0.1
    DEFAULT_COST_PER_HOUR = 10
    DEFAULT_WEAR_AND_TEAR_PER_KM = 0.15
    DEFAULT_TIME_VALUE_PER_HOUR = 8
    DEFAULT_PROFIT_MARGIN = 0.1
    # Share of a completed ride's seat price counted as saved by carpooling
    MONEY_SAVED_FACTOR = 0.8
    DEFAULT_CURRENCY = 'USD'
