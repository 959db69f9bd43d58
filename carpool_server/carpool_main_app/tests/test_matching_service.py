"""Tests for ride matching service"""

import threading
from datetime import date

from django.test import SimpleTestCase

from ..domain import ErrorCode, SearchCriteria
from ..repositories import InMemoryRideRepository
from ..services import RideMatchingService, RideService
from ..utils.constants import GenderPreference, NotificationType, RequestStatus, RideStatus, RideType
from .helpers import FailingNotificationRepository, departure, ride_data


class MatchingTestCase(SimpleTestCase):
    def setUp(self):
        self.repo = InMemoryRideRepository()
        self.driver = self.repo.add_user('Asha Rao', 'asha@mahindrauniversity.edu.in')
        self.rider = self.repo.add_user('Ravi Kumar', 'ravi@mahindrauniversity.edu.in')
        self.service = RideMatchingService(self.repo)

    def create_ride(self, owner=None, **kwargs):
        owner = owner or self.driver
        return RideService(self.repo).create_ride(owner.id, ride_data(**kwargs)).value


class SearchTest(MatchingTestCase):
    def test_destination_and_price_filter(self):
        austin = self.create_ride(to_city='Austin', cost=20, seats=2)
        self.create_ride(to_city='Dallas', cost=50, seats=1)

        results = self.service.search(self.rider.id, SearchCriteria(to_city='austin', max_cost_per_seat=25))

        self.assertEqual([r.id for r in results], [austin.id])

    def test_city_matches_address_substring(self):
        ride = self.create_ride(from_city='Hyderabad')
        results = self.service.search(self.rider.id, SearchCriteria(from_city='main gate'))
        self.assertEqual([r.id for r in results], [ride.id])

    def test_skips_own_inactive_and_joined_rides(self):
        own = self.create_ride(owner=self.rider)
        cancelled = self.create_ride()
        RideService(self.repo).cancel_ride(cancelled.id)
        joined = self.create_ride()
        self.repo.add_passenger(joined.id, self.rider.id)
        open_ride = self.create_ride()

        ids = [r.id for r in self.service.search(self.rider.id)]

        self.assertEqual(ids, [open_ride.id])
        self.assertNotIn(own.id, ids)

    def test_keeps_departure_order(self):
        later = self.create_ride(when=departure(hour=18))
        earlier = self.create_ride(when=departure(hour=7))

        ids = [r.id for r in self.service.search(self.rider.id)]

        self.assertEqual(ids, [earlier.id, later.id])

    def test_departure_date_seats_gender_and_type(self):
        match = self.create_ride(when=departure(day=21), seats=3, gender=GenderPreference.FEMALE)
        self.create_ride(when=departure(day=22), seats=3)
        self.create_ride(when=departure(day=21), seats=1)
        self.create_ride(when=departure(day=21), seats=3, gender=GenderPreference.MALE)
        self.create_ride(when=departure(day=21), seats=3, ride_type=RideType.REQUEST)

        criteria = SearchCriteria(
            departure_date=date(2026, 11, 21),
            available_seats=2,
            gender_preference=GenderPreference.FEMALE,
            ride_type=RideType.OFFER,
        )
        results = self.service.search(self.rider.id, criteria)

        self.assertEqual([r.id for r in results], [match.id])

    def test_gender_any_on_ride_matches_every_criterion(self):
        ride = self.create_ride(gender=GenderPreference.ANY)
        results = self.service.search(self.rider.id, SearchCriteria(gender_preference=GenderPreference.MALE))
        self.assertEqual([r.id for r in results], [ride.id])

    def test_explicit_candidates(self):
        first = self.create_ride(to_city='Austin')
        second = self.create_ride(to_city='Austin')
        candidates = [self.repo.get_ride(second.id), self.repo.get_ride(first.id)]

        results = self.service.search(self.rider.id, SearchCriteria(to_city='Austin'), candidates)

        self.assertEqual([r.id for r in results], [second.id, first.id])


class RequestToJoinTest(MatchingTestCase):
    def test_creates_pending_request_and_notifies_owner(self):
        ride = self.create_ride()

        result = self.service.request_to_join(self.rider.id, ride.id)

        self.assertTrue(result.success)
        self.assertEqual(result.value.status, RequestStatus.PENDING)
        self.assertEqual(result.value.requested_seats, 1)
        self.assertEqual(result.value.message, 'Ravi Kumar would like to join your ride')
        notifications = self.repo.list_notifications(self.driver.id)
        self.assertEqual(len(notifications), 1)
        self.assertEqual(notifications[0].type, NotificationType.RIDE_REQUEST)
        self.assertEqual(notifications[0].data['request_id'], str(result.value.id))

    def test_duplicate_pending_request(self):
        ride = self.create_ride()
        self.service.request_to_join(self.rider.id, ride.id)

        result = self.service.request_to_join(self.rider.id, ride.id)

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, ErrorCode.DUPLICATE_REQUEST)

    def test_can_request_again_after_rejection(self):
        ride = self.create_ride()
        first = self.service.request_to_join(self.rider.id, ride.id).value
        self.service.reject_request(first.id)

        self.assertTrue(self.service.request_to_join(self.rider.id, ride.id).success)

    def test_missing_ride(self):
        result = self.service.request_to_join(self.rider.id, 'no-such-ride')
        self.assertEqual(result.error_code, ErrorCode.NOT_FOUND)

    def test_guards(self):
        own = self.create_ride(owner=self.rider)
        self.assertEqual(self.service.request_to_join(self.rider.id, own.id).error_code, ErrorCode.OWN_RIDE)

        wanted = self.create_ride(ride_type=RideType.REQUEST)
        self.assertEqual(self.service.request_to_join(self.rider.id, wanted.id).error_code, ErrorCode.NOT_AN_OFFER)

        done = self.create_ride()
        self.repo.set_ride_status(done.id, RideStatus.COMPLETED)
        self.assertEqual(self.service.request_to_join(self.rider.id, done.id).error_code, ErrorCode.RIDE_NOT_ACTIVE)

        joined = self.create_ride()
        self.repo.add_passenger(joined.id, self.rider.id)
        self.assertEqual(self.service.request_to_join(self.rider.id, joined.id).error_code, ErrorCode.ALREADY_JOINED)

    def test_full_ride(self):
        ride = self.create_ride(seats=1)
        other = self.repo.add_user('Meera', 'meera@mahindrauniversity.edu.in')
        self.repo.add_passenger(ride.id, other.id)

        result = self.service.request_to_join(self.rider.id, ride.id)

        self.assertEqual(result.error_code, ErrorCode.NO_CAPACITY)
        self.assertEqual(self.repo.list_requests_by_passenger(self.rider.id), [])

    def test_notification_failure_does_not_fail_request(self):
        ride = self.create_ride()
        service = RideMatchingService(FailingNotificationRepository(self.repo))

        with self.assertLogs('carpool_main_app.services.notification_service', level='ERROR'):
            result = service.request_to_join(self.rider.id, ride.id)

        self.assertTrue(result.success)
        self.assertIsNotNone(self.repo.get_join_request(result.value.id))


class ApproveRejectTest(MatchingTestCase):
    def test_approve_adds_passenger(self):
        ride = self.create_ride(seats=2)
        request = self.service.request_to_join(self.rider.id, ride.id).value

        result = self.service.approve_request(request.id)

        self.assertTrue(result.success)
        self.assertEqual(result.value.status, RequestStatus.APPROVED)
        ride = self.repo.get_ride(ride.id)
        self.assertEqual(ride.passenger_ids, [self.rider.id])
        self.assertEqual(ride.available_seats, 1)
        types = [n.type for n in self.repo.list_notifications(self.rider.id)]
        self.assertIn(NotificationType.RIDE_APPROVED, types)

    def test_approving_twice_is_not_pending(self):
        ride = self.create_ride()
        request = self.service.request_to_join(self.rider.id, ride.id).value
        self.service.approve_request(request.id)

        result = self.service.approve_request(request.id)

        self.assertEqual(result.error_code, ErrorCode.NOT_PENDING)
        self.assertEqual(self.repo.get_ride(ride.id).passenger_ids, [self.rider.id])

    def test_approving_rejected_request_is_not_pending(self):
        ride = self.create_ride()
        request = self.service.request_to_join(self.rider.id, ride.id).value
        self.assertTrue(self.service.reject_request(request.id).success)

        result = self.service.approve_request(request.id)

        self.assertEqual(result.error_code, ErrorCode.NOT_PENDING)
        self.assertEqual(self.repo.get_ride(ride.id).passenger_ids, [])

    def test_rejecting_twice_is_not_pending(self):
        ride = self.create_ride()
        request = self.service.request_to_join(self.rider.id, ride.id).value
        self.service.reject_request(request.id)
        self.assertEqual(self.service.reject_request(request.id).error_code, ErrorCode.NOT_PENDING)

    def test_unknown_request(self):
        self.assertEqual(self.service.approve_request('missing').error_code, ErrorCode.NOT_FOUND)
        self.assertEqual(self.service.reject_request('missing').error_code, ErrorCode.NOT_FOUND)

    def test_capacity_invariant(self):
        ride = self.create_ride(seats=2)
        riders = [self.repo.add_user(f'Student {i}', f's{i}@mahindrauniversity.edu.in') for i in range(4)]
        requests = [self.service.request_to_join(r.id, ride.id).value for r in riders]

        results = [self.service.approve_request(req.id) for req in requests]

        self.assertEqual([r.success for r in results], [True, True, False, False])
        self.assertEqual(results[2].error_code, ErrorCode.NO_CAPACITY)
        ride = self.repo.get_ride(ride.id)
        self.assertLessEqual(len(ride.passenger_ids), ride.seat_capacity)
        # Refused requests stay pending
        self.assertTrue(self.repo.get_join_request(requests[3].id).is_pending)

    def test_requests_for_user(self):
        ride = self.create_ride()
        request = self.service.request_to_join(self.rider.id, ride.id).value

        self.assertEqual([r.id for r in self.service.requests_for_user(self.rider.id)['sent']], [request.id])
        self.assertEqual([r.id for r in self.service.requests_for_user(self.driver.id)['received']], [request.id])


class ConcurrentJoinTest(MatchingTestCase):
    def test_exactly_capacity_approvals(self):
        capacity, attempts = 3, 12
        ride = self.create_ride(seats=capacity)
        riders = [self.repo.add_user(f'Student {i}', f's{i}@mahindrauniversity.edu.in') for i in range(attempts)]
        barrier = threading.Barrier(attempts)
        approvals = []
        approvals_lock = threading.Lock()

        def join_and_approve(user):
            barrier.wait()
            joined = self.service.request_to_join(user.id, ride.id)
            if not joined.success:
                return
            approved = self.service.approve_request(joined.value.id)
            if approved.success:
                with approvals_lock:
                    approvals.append(user.id)

        threads = [threading.Thread(target=join_and_approve, args=(user,)) for user in riders]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ride = self.repo.get_ride(ride.id)
        self.assertEqual(len(approvals), capacity)
        self.assertEqual(sorted(ride.passenger_ids), sorted(approvals))
