"""Matching service - ride search and the join-request workflow"""

import logging

from django.utils import timezone

from ..domain import ErrorCode, SearchCriteria, ServiceResult
from ..repositories import DuplicateRecordError
from ..utils.constants import (
    BusinessRules, GenderPreference, NotificationType, RequestStatus, RideType,
)
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


def _local_date(value):
    if timezone.is_aware(value):
        return timezone.localtime(value).date()
    return value.date()


def _location_matches(location, term):
    term = term.lower()
    return term in location.city.lower() or term in location.address.lower()


def matches_criteria(ride, criteria):
    """True when the ride passes every criterion that is set"""
    if criteria.from_city and not _location_matches(ride.origin, criteria.from_city):
        return False
    if criteria.to_city and not _location_matches(ride.destination, criteria.to_city):
        return False
    if criteria.departure_date is not None and _local_date(ride.departure_time) != criteria.departure_date:
        return False
    if criteria.max_cost_per_seat is not None and ride.cost_per_seat > criteria.max_cost_per_seat:
        return False
    if criteria.available_seats is not None and ride.available_seats < criteria.available_seats:
        return False
    if criteria.gender_preference and ride.preferences.gender_preference not in (
        GenderPreference.ANY, criteria.gender_preference
    ):
        return False
    if criteria.ride_type and ride.kind != criteria.ride_type:
        return False
    return True


class RideMatchingService:
    """Service for ride search and join requests"""

    def __init__(self, repository, notifications=None):
        self.repository = repository
        self.notifications = notifications or NotificationService(repository)

    def search(self, user_id, criteria=None, candidate_rides=None):
        """
        Filter rides for a searching user, keeping the candidates' order.

        Args:
            user_id: The searching user; their own and joined rides are skipped
            criteria: SearchCriteria, absent fields do not filter
            candidate_rides: Rides to filter, defaults to all active rides
                ordered by departure time

        Returns:
            List of rides
        """
        criteria = criteria or SearchCriteria()
        if candidate_rides is None:
            candidate_rides = self.repository.list_active_rides()

        return [
            ride for ride in candidate_rides
            if ride.is_active
            and ride.owner_id != user_id
            and not ride.has_passenger(user_id)
            and matches_criteria(ride, criteria)
        ]

    def _check_joinable(self, ride, user_id):
        if ride is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'Ride not found')
        if not ride.is_active:
            return ServiceResult.fail(ErrorCode.RIDE_NOT_ACTIVE)
        if ride.kind != RideType.OFFER:
            return ServiceResult.fail(ErrorCode.NOT_AN_OFFER)
        if ride.owner_id == user_id:
            return ServiceResult.fail(ErrorCode.OWN_RIDE)
        if ride.has_passenger(user_id):
            return ServiceResult.fail(ErrorCode.ALREADY_JOINED)
        if ride.available_seats <= 0:
            return ServiceResult.fail(ErrorCode.NO_CAPACITY)
        if self.repository.find_pending_request(user_id, ride.id):
            return ServiceResult.fail(ErrorCode.DUPLICATE_REQUEST)
        return None

    def request_to_join(self, user_id, ride_id, message=''):
        """
        Ask to join a ride offer.

        The availability and duplicate checks run under the ride lock so
        concurrent requests for the same ride are evaluated one at a time.
        """
        user = self.repository.get_user(user_id)
        display_name = user.display_name if user else 'A student'

        with self.repository.locked_ride(ride_id) as ride:
            failure = self._check_joinable(ride, user_id)
            if failure is not None:
                logger.info(f'[MATCHING] Join request by {user_id} for ride {ride_id} refused: {failure.error_code.value}')
                return failure

            try:
                request = self.repository.create_join_request(
                    user_id,
                    ride.id,
                    BusinessRules.DEFAULT_REQUESTED_SEATS,
                    message or f'{display_name} would like to join your ride',
                )
            except DuplicateRecordError:
                return ServiceResult.fail(ErrorCode.DUPLICATE_REQUEST)

        logger.info(f'[MATCHING] Join request {request.id} created for ride {ride.id}')
        self.notifications.notify(
            ride.owner_id,
            NotificationType.RIDE_REQUEST,
            'New Ride Request',
            f'{display_name} wants to join your ride',
            {'ride_id': str(ride.id), 'request_id': str(request.id)},
        )
        return ServiceResult.ok(request, 'Ride request sent! The driver will be notified.')

    def approve_request(self, request_id):
        """
        Approve a pending join request and seat the passenger.

        Only the ride owner may call this; that check belongs to the API
        permission layer. Returns NO_CAPACITY, leaving the request pending,
        when the ride has filled up in the meantime.
        """
        request = self.repository.get_join_request(request_id)
        if request is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'Ride request not found')

        with self.repository.locked_ride(request.ride_id) as ride:
            # Re-read under the lock, a concurrent call may have decided it already
            request = self.repository.get_join_request(request_id)
            if not request.is_pending:
                return ServiceResult.fail(ErrorCode.NOT_PENDING)
            if ride is None:
                return ServiceResult.fail(ErrorCode.NOT_FOUND, 'Ride not found')
            if not ride.is_active:
                return ServiceResult.fail(ErrorCode.RIDE_NOT_ACTIVE)
            if ride.available_seats < request.requested_seats:
                logger.info(f'[MATCHING] Ride {ride.id} is full, request {request_id} stays pending')
                return ServiceResult.fail(ErrorCode.NO_CAPACITY)

            request = self.repository.set_request_status(request_id, RequestStatus.APPROVED)
            self.repository.add_passenger(ride.id, request.passenger_id)

        logger.info(f'[MATCHING] Request {request_id} approved, passenger {request.passenger_id} joined ride {ride.id}')
        self.notifications.notify(
            request.passenger_id,
            NotificationType.RIDE_APPROVED,
            'Ride Request Approved!',
            'Your request to join the ride has been approved.',
            {'ride_id': str(ride.id)},
        )
        return ServiceResult.ok(request, 'Passenger added to the ride')

    def reject_request(self, request_id):
        request = self.repository.get_join_request(request_id)
        if request is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'Ride request not found')

        with self.repository.locked_ride(request.ride_id):
            request = self.repository.get_join_request(request_id)
            if not request.is_pending:
                return ServiceResult.fail(ErrorCode.NOT_PENDING)
            request = self.repository.set_request_status(request_id, RequestStatus.REJECTED)

        logger.info(f'[MATCHING] Request {request_id} rejected')
        return ServiceResult.ok(request, 'Request declined')

    def requests_for_user(self, user_id):
        """Requests the user sent plus requests for rides the user owns"""
        sent = self.repository.list_requests_by_passenger(user_id)
        received = self.repository.list_requests_for_owner(user_id)
        return {'sent': sent, 'received': received}
