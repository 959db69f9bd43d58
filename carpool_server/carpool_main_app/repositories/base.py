"""Persistence interface consumed by the carpool services"""

from abc import ABC, abstractmethod


class DuplicateRecordError(Exception):
    """Raised when an insert violates a uniqueness rule of the store"""
    pass


class RideRepository(ABC):
    """
    CRUD over users, rides, join requests, messages, ratings and
    notifications. Every method takes and returns domain records.

    ``locked_ride`` is the only place where the passenger list may be read
    and then changed: implementations must guarantee that two callers
    holding the lock for the same ride never interleave.
    """

    # Users

    @abstractmethod
    def get_user(self, user_id):
        pass

    @abstractmethod
    def update_user_rating(self, user_id, rating, total_ratings):
        pass

    # Rides

    @abstractmethod
    def add_ride(self, owner_id, data):
        pass

    @abstractmethod
    def get_ride(self, ride_id):
        pass

    @abstractmethod
    def list_active_rides(self):
        """Active rides ordered by departure time, earliest first"""
        pass

    @abstractmethod
    def list_rides_for_user(self, user_id):
        """Rides the user owns or has joined"""
        pass

    @abstractmethod
    def set_ride_status(self, ride_id, status):
        pass

    @abstractmethod
    def locked_ride(self, ride_id):
        """Context manager yielding the ride (or None) under an exclusive lock"""
        pass

    @abstractmethod
    def add_passenger(self, ride_id, user_id):
        pass

    # Join requests

    @abstractmethod
    def create_join_request(self, passenger_id, ride_id, requested_seats, message):
        pass

    @abstractmethod
    def get_join_request(self, request_id):
        pass

    @abstractmethod
    def find_pending_request(self, passenger_id, ride_id):
        pass

    @abstractmethod
    def set_request_status(self, request_id, status):
        pass

    @abstractmethod
    def list_requests_by_passenger(self, passenger_id):
        pass

    @abstractmethod
    def list_requests_for_owner(self, owner_id):
        pass

    # Ratings

    @abstractmethod
    def add_rating(self, rater_id, rated_user_id, ride_id, score, rating_type, comment):
        pass

    @abstractmethod
    def rating_exists(self, rater_id, rated_user_id, ride_id, rating_type):
        pass

    @abstractmethod
    def list_ratings_for_user(self, user_id):
        pass

    @abstractmethod
    def rating_summary(self, user_id):
        """(mean score or None, number of ratings) for the rated user"""
        pass

    # Messages

    @abstractmethod
    def add_message(self, sender_id, receiver_id, ride_id, content, message_type):
        pass

    @abstractmethod
    def list_conversation(self, user_a, user_b, ride_id):
        pass

    @abstractmethod
    def mark_messages_read(self, reader_id, ride_id):
        pass

    @abstractmethod
    def count_unread_messages(self, user_id):
        pass

    # Notifications

    @abstractmethod
    def add_notification(self, user_id, notification_type, title, message, data):
        pass

    @abstractmethod
    def list_notifications(self, user_id, unread_only=False):
        """Newest first"""
        pass

    @abstractmethod
    def mark_notification_read(self, notification_id, user_id):
        pass

    @abstractmethod
    def mark_all_notifications_read(self, user_id):
        pass

    @abstractmethod
    def count_unread_notifications(self, user_id):
        pass
