"""Tests for the Django ORM repository"""

import threading

from django.contrib.auth.models import User
from django.db import connection
from django.test import TestCase, TransactionTestCase, skipUnlessDBFeature

from ..domain import ErrorCode, OfferRide
from ..models import Profile, RideRequest
from ..repositories import DjangoRideRepository, DuplicateRecordError
from ..services import RatingService, RideMatchingService, RideService
from ..utils.constants import NotificationType, RatingType, RequestStatus, RideType
from .helpers import ride_data


class DjangoRepositoryTest(TestCase):
    def setUp(self):
        self.repo = DjangoRideRepository()
        self.driver = User.objects.create_user(
            'asha@mahindrauniversity.edu.in', 'asha@mahindrauniversity.edu.in', 'secret-pass',
            first_name='Asha', last_name='Rao',
        )
        self.rider = User.objects.create_user(
            'ravi@mahindrauniversity.edu.in', 'ravi@mahindrauniversity.edu.in', 'secret-pass',
            first_name='Ravi', last_name='Kumar',
        )
        self.ride = self.repo.add_ride(self.driver.id, ride_data(seats=2, cost=15.5))

    def test_profile_created_by_signal(self):
        self.assertTrue(Profile.objects.filter(user=self.driver).exists())

    def test_get_user(self):
        user = self.repo.get_user(self.driver.id)
        self.assertEqual(user.display_name, 'Asha Rao')
        self.assertEqual(user.rating, 0.0)
        self.assertIsNone(self.repo.get_user(99999))
        self.assertIsNone(self.repo.get_user('not-a-number'))

    def test_ride_round_trip(self):
        ride = self.repo.get_ride(self.ride.id)

        self.assertIsInstance(ride, OfferRide)
        self.assertEqual(ride.kind, RideType.OFFER)
        self.assertEqual(ride.cost_per_seat, 15.5)
        self.assertEqual(ride.origin.city, 'Hyderabad')
        self.assertEqual(ride.available_seats, 2)
        self.assertIsNone(self.repo.get_ride('not-a-uuid'))

    def test_locked_ride_yields_none_for_missing(self):
        with self.repo.locked_ride('00000000-0000-0000-0000-000000000000') as ride:
            self.assertIsNone(ride)

    def test_one_pending_request_per_ride(self):
        self.repo.create_join_request(self.rider.id, self.ride.id, 1, 'hi')
        with self.assertRaises(DuplicateRecordError):
            self.repo.create_join_request(self.rider.id, self.ride.id, 1, 'again')
        self.assertEqual(RideRequest.objects.count(), 1)

    def test_join_and_approve_flow(self):
        matching = RideMatchingService(self.repo)
        request = matching.request_to_join(self.rider.id, self.ride.id).value

        result = matching.approve_request(request.id)

        self.assertTrue(result.success)
        self.assertEqual(RideRequest.objects.get(id=request.id).status, RequestStatus.APPROVED)
        ride = self.repo.get_ride(self.ride.id)
        self.assertEqual(ride.passenger_ids, [self.rider.id])
        self.assertEqual(self.repo.list_rides_for_user(self.rider.id)[0].id, self.ride.id)
        self.assertEqual(matching.approve_request(request.id).error_code, ErrorCode.NOT_PENDING)

    def test_capacity_is_enforced(self):
        matching = RideMatchingService(self.repo)
        users = [
            User.objects.create_user(f'student{i}@mahindrauniversity.edu.in', f'student{i}@mahindrauniversity.edu.in')
            for i in range(3)
        ]
        requests = [matching.request_to_join(u.id, self.ride.id).value for u in users]

        results = [matching.approve_request(r.id) for r in requests]

        self.assertEqual([r.success for r in results], [True, True, False])
        self.assertEqual(results[2].error_code, ErrorCode.NO_CAPACITY)
        self.assertEqual(self.repo.get_ride(self.ride.id).available_seats, 0)

    def test_rating_aggregate_written_to_profile(self):
        service = RatingService(self.repo)
        service.record_rating(self.rider.id, self.driver.id, self.ride.id, 4, RatingType.DRIVER)
        third = User.objects.create_user('kiran@mahindrauniversity.edu.in')
        service.record_rating(third.id, self.driver.id, self.ride.id, 5, RatingType.DRIVER)

        profile = Profile.objects.get(user=self.driver)
        self.assertEqual(float(profile.rating), 4.5)
        self.assertEqual(profile.total_ratings, 2)

        duplicate = service.record_rating(self.rider.id, self.driver.id, self.ride.id, 1, RatingType.DRIVER)
        self.assertEqual(duplicate.error_code, ErrorCode.DUPLICATE_RATING)

    def test_notifications(self):
        first = self.repo.add_notification(self.driver.id, NotificationType.MESSAGE, 'One', 'First', {})
        self.repo.add_notification(self.driver.id, NotificationType.RATING, 'Two', 'Second', {'ride_id': 'x'})

        self.assertEqual(self.repo.count_unread_notifications(self.driver.id), 2)
        self.assertTrue(self.repo.mark_notification_read(first.id, self.driver.id))
        self.assertFalse(self.repo.mark_notification_read(first.id, self.rider.id))
        self.assertFalse(self.repo.mark_notification_read('bad-id', self.driver.id))
        self.assertEqual(self.repo.mark_all_notifications_read(self.driver.id), 1)

    def test_messages(self):
        self.repo.add_message(self.rider.id, self.driver.id, self.ride.id, 'Hi', 'text')
        self.repo.add_message(self.driver.id, self.rider.id, self.ride.id, 'Hello', 'text')

        conversation = self.repo.list_conversation(self.driver.id, self.rider.id, self.ride.id)

        self.assertEqual([m.content for m in conversation], ['Hi', 'Hello'])
        self.assertEqual(self.repo.count_unread_messages(self.driver.id), 1)
        self.assertEqual(self.repo.mark_messages_read(self.driver.id, self.ride.id), 1)

    def test_cancel_and_stats(self):
        service = RideService(self.repo)
        matching = RideMatchingService(self.repo)
        request = matching.request_to_join(self.rider.id, self.ride.id).value
        matching.approve_request(request.id)
        service.complete_ride(self.ride.id)

        stats = service.user_stats(self.rider.id).value

        self.assertEqual(stats.rides_as_passenger, 1)
        self.assertEqual(stats.completed_rides, 1)
        self.assertEqual(stats.money_saved, 12.4)


class DjangoRepositoryLockingTest(TransactionTestCase):
    def setUp(self):
        self.repo = DjangoRideRepository()
        self.driver = User.objects.create_user('asha@mahindrauniversity.edu.in', 'asha@mahindrauniversity.edu.in')
        self.ride = self.repo.add_ride(self.driver.id, ride_data(seats=3))

    def test_locked_ride_holds_a_transaction(self):
        self.assertFalse(connection.in_atomic_block)
        with self.repo.locked_ride(self.ride.id) as ride:
            self.assertEqual(ride.id, self.ride.id)
            self.assertTrue(connection.in_atomic_block)
        self.assertFalse(connection.in_atomic_block)

    @skipUnlessDBFeature('has_select_for_update')
    def test_concurrent_approvals_never_overbook(self):
        capacity = 3
        riders = [
            User.objects.create_user(f'student{i}@mahindrauniversity.edu.in', f'student{i}@mahindrauniversity.edu.in')
            for i in range(10)
        ]
        matching = RideMatchingService(self.repo)
        requests = [matching.request_to_join(u.id, self.ride.id).value for u in riders]

        barrier = threading.Barrier(len(requests))
        results = []
        results_lock = threading.Lock()

        def approve(request_id):
            try:
                barrier.wait()
                result = RideMatchingService(DjangoRideRepository()).approve_request(request_id)
                with results_lock:
                    results.append(result)
            finally:
                connection.close()

        threads = [threading.Thread(target=approve, args=(r.id,)) for r in requests]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        approved = [r for r in results if r.success]
        self.assertEqual(len(approved), capacity)
        self.assertTrue(all(r.error_code == ErrorCode.NO_CAPACITY for r in results if not r.success))
        ride = self.repo.get_ride(self.ride.id)
        self.assertEqual(len(ride.passenger_ids), capacity)
        self.assertEqual(RideRequest.objects.filter(status=RequestStatus.APPROVED).count(), capacity)
