"""In-memory repository used by tests and the demo mode.

Each instance owns its own storage; nothing is shared between instances.
Records are copied on the way in and out so callers cannot mutate the
store behind the repository's back.
"""

import copy
import threading
import uuid
from contextlib import contextmanager
from dataclasses import replace

from django.utils import timezone

from ..domain import (
    JoinRequest, Message, Notification, Rating, UserAccount, build_ride,
)
from ..utils.constants import RequestStatus, RideStatus
from .base import DuplicateRecordError, RideRepository


def _new_id():
    return str(uuid.uuid4())


class InMemoryRideRepository(RideRepository):

    def __init__(self):
        self._lock = threading.RLock()
        self._ride_locks = {}
        self._users = {}
        self._rides = {}
        self._requests = {}
        self._ratings = {}
        self._messages = {}
        self._notifications = {}

    def add_user(self, display_name, email, is_verified=True, user_id=None):
        user = UserAccount(
            id=user_id or _new_id(),
            display_name=display_name,
            email=email,
            is_verified=is_verified,
        )
        with self._lock:
            self._users[user.id] = user
        return copy.deepcopy(user)

    def get_user(self, user_id):
        with self._lock:
            return copy.deepcopy(self._users.get(user_id))

    def update_user_rating(self, user_id, rating, total_ratings):
        with self._lock:
            user = self._users[user_id]
            user.rating = rating
            user.total_ratings = total_ratings

    def add_ride(self, owner_id, data):
        ride = build_ride(
            data.ride_type,
            id=_new_id(),
            owner_id=owner_id,
            origin=data.origin,
            destination=data.destination,
            departure_time=data.departure_time,
            seat_capacity=data.seat_capacity,
            cost_per_seat=data.cost_per_seat,
            description=data.description,
            preferences=data.preferences,
            created_at=timezone.now(),
        )
        with self._lock:
            self._rides[ride.id] = ride
        return copy.deepcopy(ride)

    def get_ride(self, ride_id):
        with self._lock:
            return copy.deepcopy(self._rides.get(ride_id))

    def list_active_rides(self):
        with self._lock:
            rides = [r for r in self._rides.values() if r.status == RideStatus.ACTIVE]
            return copy.deepcopy(sorted(rides, key=lambda r: r.departure_time))

    def list_rides_for_user(self, user_id):
        with self._lock:
            rides = [
                r for r in self._rides.values()
                if r.owner_id == user_id or user_id in r.passenger_ids
            ]
            return copy.deepcopy(sorted(rides, key=lambda r: r.departure_time))

    def set_ride_status(self, ride_id, status):
        with self._lock:
            self._rides[ride_id].status = status
            return copy.deepcopy(self._rides[ride_id])

    def _ride_lock(self, ride_id):
        with self._lock:
            return self._ride_locks.setdefault(ride_id, threading.Lock())

    @contextmanager
    def locked_ride(self, ride_id):
        with self._ride_lock(ride_id):
            yield self.get_ride(ride_id)

    def add_passenger(self, ride_id, user_id):
        with self._lock:
            ride = self._rides[ride_id]
            if user_id not in ride.passenger_ids:
                ride.passenger_ids.append(user_id)
            return copy.deepcopy(ride)

    def create_join_request(self, passenger_id, ride_id, requested_seats, message):
        now = timezone.now()
        with self._lock:
            if self._find_pending(passenger_id, ride_id):
                raise DuplicateRecordError('Pending request already exists')
            request = JoinRequest(
                id=_new_id(),
                passenger_id=passenger_id,
                ride_id=ride_id,
                requested_seats=requested_seats,
                message=message,
                created_at=now,
                updated_at=now,
            )
            self._requests[request.id] = request
            return copy.deepcopy(request)

    def get_join_request(self, request_id):
        with self._lock:
            return copy.deepcopy(self._requests.get(request_id))

    def _find_pending(self, passenger_id, ride_id):
        for request in self._requests.values():
            if (request.passenger_id == passenger_id and request.ride_id == ride_id
                    and request.status == RequestStatus.PENDING):
                return request
        return None

    def find_pending_request(self, passenger_id, ride_id):
        with self._lock:
            return copy.deepcopy(self._find_pending(passenger_id, ride_id))

    def set_request_status(self, request_id, status):
        with self._lock:
            request = replace(self._requests[request_id], status=status, updated_at=timezone.now())
            self._requests[request_id] = request
            return copy.deepcopy(request)

    def list_requests_by_passenger(self, passenger_id):
        with self._lock:
            return copy.deepcopy([r for r in self._requests.values() if r.passenger_id == passenger_id])

    def list_requests_for_owner(self, owner_id):
        with self._lock:
            owned = {ride_id for ride_id, ride in self._rides.items() if ride.owner_id == owner_id}
            return copy.deepcopy([r for r in self._requests.values() if r.ride_id in owned])

    def add_rating(self, rater_id, rated_user_id, ride_id, score, rating_type, comment):
        with self._lock:
            if self._rating_exists(rater_id, rated_user_id, ride_id, rating_type):
                raise DuplicateRecordError('Rating already exists')
            rating = Rating(
                id=_new_id(),
                rater_id=rater_id,
                rated_user_id=rated_user_id,
                ride_id=ride_id,
                score=score,
                rating_type=rating_type,
                comment=comment,
                created_at=timezone.now(),
            )
            self._ratings[rating.id] = rating
            return copy.deepcopy(rating)

    def _rating_exists(self, rater_id, rated_user_id, ride_id, rating_type):
        return any(
            r.rater_id == rater_id and r.rated_user_id == rated_user_id
            and r.ride_id == ride_id and r.rating_type == rating_type
            for r in self._ratings.values()
        )

    def rating_exists(self, rater_id, rated_user_id, ride_id, rating_type):
        with self._lock:
            return self._rating_exists(rater_id, rated_user_id, ride_id, rating_type)

    def list_ratings_for_user(self, user_id):
        with self._lock:
            return copy.deepcopy([r for r in self._ratings.values() if r.rated_user_id == user_id])

    def rating_summary(self, user_id):
        with self._lock:
            scores = [r.score for r in self._ratings.values() if r.rated_user_id == user_id]
        if not scores:
            return None, 0
        return sum(scores) / len(scores), len(scores)

    def add_message(self, sender_id, receiver_id, ride_id, content, message_type):
        message = Message(
            id=_new_id(),
            sender_id=sender_id,
            receiver_id=receiver_id,
            ride_id=ride_id,
            content=content,
            message_type=message_type,
            created_at=timezone.now(),
        )
        with self._lock:
            self._messages[message.id] = message
        return copy.deepcopy(message)

    def list_conversation(self, user_a, user_b, ride_id):
        participants = {user_a, user_b}
        with self._lock:
            return copy.deepcopy([
                m for m in self._messages.values()
                if m.ride_id == ride_id and {m.sender_id, m.receiver_id} == participants
            ])

    def mark_messages_read(self, reader_id, ride_id):
        updated = 0
        with self._lock:
            for message in self._messages.values():
                if message.receiver_id == reader_id and message.ride_id == ride_id and not message.is_read:
                    message.is_read = True
                    updated += 1
        return updated

    def count_unread_messages(self, user_id):
        with self._lock:
            return sum(1 for m in self._messages.values() if m.receiver_id == user_id and not m.is_read)

    def add_notification(self, user_id, notification_type, title, message, data):
        notification = Notification(
            id=_new_id(),
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            data=dict(data or {}),
            created_at=timezone.now(),
        )
        with self._lock:
            self._notifications[notification.id] = notification
        return copy.deepcopy(notification)

    def list_notifications(self, user_id, unread_only=False):
        with self._lock:
            notifications = [
                n for n in self._notifications.values()
                if n.user_id == user_id and not (unread_only and n.is_read)
            ]
            return copy.deepcopy(list(reversed(notifications)))

    def mark_notification_read(self, notification_id, user_id):
        with self._lock:
            notification = self._notifications.get(notification_id)
            if notification is None or notification.user_id != user_id:
                return False
            notification.is_read = True
            return True

    def mark_all_notifications_read(self, user_id):
        updated = 0
        with self._lock:
            for notification in self._notifications.values():
                if notification.user_id == user_id and not notification.is_read:
                    notification.is_read = True
                    updated += 1
        return updated

    def count_unread_notifications(self, user_id):
        with self._lock:
            return sum(1 for n in self._notifications.values() if n.user_id == user_id and not n.is_read)
