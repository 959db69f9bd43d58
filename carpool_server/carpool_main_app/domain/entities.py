"""
Domain records shared by the services and the repositories.

Dataclasses only: no ORM, no HTTP. Repositories translate their storage
rows into these records and the services never see anything else.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..utils.constants import (
    GenderPreference, MessageType, RequestStatus, RideStatus, RideType,
)


@dataclass(frozen=True)
class Location:
    address: str
    city: str
    state: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class RidePreferences:
    smoking_allowed: bool = False
    pets_allowed: bool = False
    music_allowed: bool = True
    gender_preference: str = GenderPreference.ANY


@dataclass
class UserAccount:
    id: Any
    display_name: str
    email: str
    is_verified: bool = False
    rating: float = 0.0
    total_ratings: int = 0


@dataclass
class Ride:
    """Common record for both ride kinds. Use OfferRide or RequestRide."""
    id: Any
    owner_id: Any
    origin: Location
    destination: Location
    departure_time: datetime
    seat_capacity: int
    cost_per_seat: float
    description: str = ''
    status: str = RideStatus.ACTIVE
    preferences: RidePreferences = field(default_factory=RidePreferences)
    passenger_ids: List[Any] = field(default_factory=list)
    created_at: Optional[datetime] = None

    kind = None

    @property
    def available_seats(self) -> int:
        return self.seat_capacity - len(self.passenger_ids)

    @property
    def is_active(self) -> bool:
        return self.status == RideStatus.ACTIVE

    def has_passenger(self, user_id) -> bool:
        return user_id in self.passenger_ids


@dataclass
class OfferRide(Ride):
    """A driver offering seats in their car."""
    kind = RideType.OFFER

    @property
    def driver_id(self):
        return self.owner_id


@dataclass
class RequestRide(Ride):
    """A rider advertising that they need a ride."""
    kind = RideType.REQUEST

    @property
    def rider_id(self):
        return self.owner_id


RIDE_CLASSES = {
    RideType.OFFER: OfferRide,
    RideType.REQUEST: RequestRide,
}


def build_ride(kind, **fields) -> Ride:
    try:
        ride_class = RIDE_CLASSES[kind]
    except KeyError:
        raise ValueError(f'Unknown ride type: {kind!r}')
    return ride_class(**fields)


@dataclass
class JoinRequest:
    id: Any
    passenger_id: Any
    ride_id: Any
    status: str = RequestStatus.PENDING
    requested_seats: int = 1
    message: str = ''
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING


@dataclass
class Message:
    id: Any
    sender_id: Any
    receiver_id: Any
    ride_id: Any
    content: str
    message_type: str = MessageType.TEXT
    is_read: bool = False
    created_at: Optional[datetime] = None


@dataclass
class Rating:
    id: Any
    rater_id: Any
    rated_user_id: Any
    ride_id: Any
    score: int
    rating_type: str
    comment: str = ''
    created_at: Optional[datetime] = None


@dataclass
class Notification:
    id: Any
    user_id: Any
    type: str
    title: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CreateRideData:
    ride_type: str
    origin: Location
    destination: Location
    departure_time: datetime
    seat_capacity: int
    cost_per_seat: float
    description: str = ''
    preferences: RidePreferences = field(default_factory=RidePreferences)


@dataclass(frozen=True)
class SearchCriteria:
    """Every field is optional; an absent field does not filter."""
    from_city: Optional[str] = None
    to_city: Optional[str] = None
    departure_date: Optional[date] = None
    max_cost_per_seat: Optional[float] = None
    available_seats: Optional[int] = None
    gender_preference: Optional[str] = None
    ride_type: Optional[str] = None


@dataclass(frozen=True)
class PassengerShare:
    user_id: Any
    amount: float


@dataclass(frozen=True)
class CostBreakdown:
    total_cost: float
    cost_per_seat: float
    passenger_count: int
    driver_share: float
    passenger_shares: List[PassengerShare]


@dataclass(frozen=True)
class SavingsSummary:
    savings: float
    percentage: float


@dataclass(frozen=True)
class UserStats:
    rides_as_driver: int
    rides_as_passenger: int
    completed_rides: int
    rating: float
    total_ratings: int
    money_saved: float
