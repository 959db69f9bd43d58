"""Shared builders for the carpool tests"""

from datetime import datetime

from django.utils import timezone

from ..domain import CreateRideData, Location, RidePreferences
from ..utils.constants import GenderPreference, RideType


def departure(year=2026, month=11, day=20, hour=9, minute=0):
    return timezone.make_aware(datetime(year, month, day, hour, minute))


def ride_data(from_city='Hyderabad', to_city='Bangalore', seats=3, cost=20.0,
              ride_type=RideType.OFFER, when=None, gender=GenderPreference.ANY, **extra):
    return CreateRideData(
        ride_type=ride_type,
        origin=Location(address=f'Main Gate, {from_city}', city=from_city, state='TS'),
        destination=Location(address=f'Central Station, {to_city}', city=to_city, state='KA'),
        departure_time=when or departure(),
        seat_capacity=seats,
        cost_per_seat=cost,
        preferences=RidePreferences(gender_preference=gender),
        **extra
    )


class FailingNotificationRepository:
    """Wraps a repository and fails every notification write"""

    def __init__(self, repository):
        self._repository = repository

    def __getattr__(self, name):
        return getattr(self._repository, name)

    def add_notification(self, *args, **kwargs):
        raise RuntimeError('notification store unavailable')
