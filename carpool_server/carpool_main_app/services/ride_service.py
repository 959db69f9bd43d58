"""Ride service - ride lifecycle, cost breakdowns and user statistics"""

import logging
import math
from numbers import Real

from ..domain import ErrorCode, ServiceResult, UserStats
from ..utils.constants import BusinessRules, NotificationType, RideStatus, RideType
from .fare_service import round2, split_cost
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


def _validate_ride_data(data):
    """Return an error message for invalid ride data, or None"""
    if data.ride_type not in (RideType.OFFER, RideType.REQUEST):
        return f'Unknown ride type: {data.ride_type}'
    capacity = data.seat_capacity
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
        return 'Seat capacity must be at least 1'
    cost = data.cost_per_seat
    if isinstance(cost, bool) or not isinstance(cost, Real) or not math.isfinite(cost) or cost < 0:
        return 'Cost per seat must be a non-negative amount'
    if data.departure_time is None:
        return 'Departure time is required'
    if not data.origin.city or not data.destination.city:
        return 'Origin and destination cities are required'
    return None


class RideService:
    """Service for ride lifecycle operations"""

    def __init__(self, repository, notifications=None):
        self.repository = repository
        self.notifications = notifications or NotificationService(repository)

    def create_ride(self, owner_id, data):
        error = _validate_ride_data(data)
        if error:
            return ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, error)
        if self.repository.get_user(owner_id) is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'User not found')

        ride = self.repository.add_ride(owner_id, data)
        logger.info(
            f'[RIDE] User {owner_id} created {ride.kind} {ride.id}: '
            f'{ride.origin.city} -> {ride.destination.city}, {ride.seat_capacity} seats'
        )
        return ServiceResult.ok(ride, 'Ride created successfully!')

    def get_ride(self, ride_id):
        return self.repository.get_ride(ride_id)

    def rides_for_user(self, user_id):
        return self.repository.list_rides_for_user(user_id)

    def complete_ride(self, ride_id):
        return self._finish(ride_id, RideStatus.COMPLETED)

    def cancel_ride(self, ride_id):
        result = self._finish(ride_id, RideStatus.CANCELLED)
        if result.success:
            ride = result.value
            for passenger_id in ride.passenger_ids:
                self.notifications.notify(
                    passenger_id,
                    NotificationType.RIDE_CANCELLED,
                    'Ride Cancelled',
                    f'Your ride from {ride.origin.city} to {ride.destination.city} has been cancelled.',
                    {'ride_id': str(ride.id)},
                )
        return result

    def _finish(self, ride_id, status):
        # Status only moves forward: active -> completed | cancelled
        with self.repository.locked_ride(ride_id) as ride:
            if ride is None:
                return ServiceResult.fail(ErrorCode.NOT_FOUND, 'Ride not found')
            if not ride.is_active:
                return ServiceResult.fail(ErrorCode.RIDE_NOT_ACTIVE)
            ride = self.repository.set_ride_status(ride_id, status)

        logger.info(f'[RIDE] Ride {ride_id} marked {status}')
        return ServiceResult.ok(ride, f'Ride {status}')

    def cost_breakdown(self, ride_id, include_driver_in_split=False):
        ride = self.repository.get_ride(ride_id)
        if ride is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'Ride not found')
        total_cost = round2(ride.cost_per_seat * ride.seat_capacity)
        return ServiceResult.ok(split_cost(total_cost, ride.passenger_ids, include_driver_in_split))

    def user_stats(self, user_id):
        user = self.repository.get_user(user_id)
        if user is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'User not found')

        rides = self.repository.list_rides_for_user(user_id)
        as_driver = [r for r in rides if r.owner_id == user_id]
        as_passenger = [r for r in rides if r.has_passenger(user_id)]
        completed = [r for r in rides if r.status == RideStatus.COMPLETED]
        money_saved = sum(
            r.cost_per_seat * BusinessRules.MONEY_SAVED_FACTOR
            for r in as_passenger if r.status == RideStatus.COMPLETED
        )
        return ServiceResult.ok(UserStats(
            rides_as_driver=len(as_driver),
            rides_as_passenger=len(as_passenger),
            completed_rides=len(completed),
            rating=user.rating,
            total_ratings=user.total_ratings,
            money_saved=round2(money_saved),
        ))
