"""Django ORM repository - the production persistence layer"""

from contextlib import contextmanager
from decimal import Decimal

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Avg, Count, Q
from django.utils import timezone

from .. import domain
from ..models import Message, Notification, Profile, Rating, Ride, RidePassenger, RideRequest
from ..utils.constants import RequestStatus, RideStatus
from .base import DuplicateRecordError, RideRepository

LOOKUP_ERRORS = (ValidationError, ValueError, TypeError)


def _to_float(value):
    return float(value) if value is not None else None


def _to_decimal(value):
    return Decimal(str(value))


def _to_user(user):
    profile = getattr(user, 'profile', None)
    return domain.UserAccount(
        id=user.id,
        display_name=profile.display_name if profile else (user.get_full_name() or user.username),
        email=user.email,
        is_verified=profile.is_verified if profile else False,
        rating=_to_float(profile.rating) if profile else 0.0,
        total_ratings=profile.total_ratings if profile else 0,
    )


def _to_ride(row):
    memberships = sorted(row.ride_passengers.all(), key=lambda m: m.joined_at)
    return domain.build_ride(
        row.ride_type,
        id=row.id,
        owner_id=row.owner_id,
        origin=domain.Location(
            address=row.from_address,
            city=row.from_city,
            state=row.from_state,
            latitude=_to_float(row.from_latitude),
            longitude=_to_float(row.from_longitude),
        ),
        destination=domain.Location(
            address=row.to_address,
            city=row.to_city,
            state=row.to_state,
            latitude=_to_float(row.to_latitude),
            longitude=_to_float(row.to_longitude),
        ),
        departure_time=row.departure_time,
        seat_capacity=row.seat_capacity,
        cost_per_seat=float(row.cost_per_seat),
        description=row.description,
        status=row.status,
        preferences=domain.RidePreferences(
            smoking_allowed=row.smoking_allowed,
            pets_allowed=row.pets_allowed,
            music_allowed=row.music_allowed,
            gender_preference=row.gender_preference,
        ),
        passenger_ids=[m.passenger_id for m in memberships],
        created_at=row.created_at,
    )


def _to_request(row):
    return domain.JoinRequest(
        id=row.id,
        passenger_id=row.passenger_id,
        ride_id=row.ride_id,
        status=row.status,
        requested_seats=row.requested_seats,
        message=row.message,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_rating(row):
    return domain.Rating(
        id=row.id,
        rater_id=row.rater_id,
        rated_user_id=row.rated_user_id,
        ride_id=row.ride_id,
        score=row.score,
        rating_type=row.rating_type,
        comment=row.comment,
        created_at=row.created_at,
    )


def _to_message(row):
    return domain.Message(
        id=row.id,
        sender_id=row.sender_id,
        receiver_id=row.receiver_id,
        ride_id=row.ride_id,
        content=row.content,
        message_type=row.message_type,
        is_read=row.is_read,
        created_at=row.created_at,
    )


def _to_notification(row):
    return domain.Notification(
        id=row.id,
        user_id=row.user_id,
        type=row.type,
        title=row.title,
        message=row.message,
        data=row.data,
        is_read=row.is_read,
        created_at=row.created_at,
    )


class DjangoRideRepository(RideRepository):

    def _rides(self):
        return Ride.objects.prefetch_related('ride_passengers')

    def get_user(self, user_id):
        try:
            user = User.objects.select_related('profile').get(id=user_id)
        except (User.DoesNotExist, *LOOKUP_ERRORS):
            return None
        return _to_user(user)

    def update_user_rating(self, user_id, rating, total_ratings):
        Profile.objects.update_or_create(
            user_id=user_id,
            defaults={'rating': _to_decimal(rating), 'total_ratings': total_ratings},
        )

    def add_ride(self, owner_id, data):
        row = Ride.objects.create(
            owner_id=owner_id,
            ride_type=data.ride_type,
            from_address=data.origin.address,
            from_city=data.origin.city,
            from_state=data.origin.state,
            from_latitude=data.origin.latitude,
            from_longitude=data.origin.longitude,
            to_address=data.destination.address,
            to_city=data.destination.city,
            to_state=data.destination.state,
            to_latitude=data.destination.latitude,
            to_longitude=data.destination.longitude,
            departure_time=data.departure_time,
            seat_capacity=data.seat_capacity,
            cost_per_seat=_to_decimal(data.cost_per_seat),
            description=data.description,
            smoking_allowed=data.preferences.smoking_allowed,
            pets_allowed=data.preferences.pets_allowed,
            music_allowed=data.preferences.music_allowed,
            gender_preference=data.preferences.gender_preference,
        )
        return _to_ride(row)

    def get_ride(self, ride_id):
        try:
            return _to_ride(self._rides().get(id=ride_id))
        except (Ride.DoesNotExist, *LOOKUP_ERRORS):
            return None

    def list_active_rides(self):
        rows = self._rides().filter(status=RideStatus.ACTIVE).order_by('departure_time')
        return [_to_ride(row) for row in rows]

    def list_rides_for_user(self, user_id):
        rows = self._rides().filter(
            Q(owner_id=user_id) | Q(ride_passengers__passenger_id=user_id)
        ).distinct().order_by('departure_time')
        return [_to_ride(row) for row in rows]

    def set_ride_status(self, ride_id, status):
        Ride.objects.filter(id=ride_id).update(status=status, updated_at=timezone.now())
        return self.get_ride(ride_id)

    @contextmanager
    def locked_ride(self, ride_id):
        with transaction.atomic():
            try:
                row = Ride.objects.select_for_update().get(id=ride_id)
            except (Ride.DoesNotExist, *LOOKUP_ERRORS):
                row = None
            yield _to_ride(row) if row else None

    def add_passenger(self, ride_id, user_id):
        RidePassenger.objects.get_or_create(ride_id=ride_id, passenger_id=user_id)
        return self.get_ride(ride_id)

    def create_join_request(self, passenger_id, ride_id, requested_seats, message):
        try:
            with transaction.atomic():
                row = RideRequest.objects.create(
                    passenger_id=passenger_id,
                    ride_id=ride_id,
                    requested_seats=requested_seats,
                    message=message,
                    status=RequestStatus.PENDING,
                )
        except IntegrityError as e:
            raise DuplicateRecordError(str(e))
        return _to_request(row)

    def get_join_request(self, request_id):
        try:
            return _to_request(RideRequest.objects.get(id=request_id))
        except (RideRequest.DoesNotExist, *LOOKUP_ERRORS):
            return None

    def find_pending_request(self, passenger_id, ride_id):
        row = RideRequest.objects.filter(
            passenger_id=passenger_id, ride_id=ride_id, status=RequestStatus.PENDING
        ).first()
        return _to_request(row) if row else None

    def set_request_status(self, request_id, status):
        RideRequest.objects.filter(id=request_id).update(status=status, updated_at=timezone.now())
        return self.get_join_request(request_id)

    def list_requests_by_passenger(self, passenger_id):
        return [_to_request(row) for row in RideRequest.objects.filter(passenger_id=passenger_id)]

    def list_requests_for_owner(self, owner_id):
        return [_to_request(row) for row in RideRequest.objects.filter(ride__owner_id=owner_id)]

    def add_rating(self, rater_id, rated_user_id, ride_id, score, rating_type, comment):
        try:
            with transaction.atomic():
                row = Rating.objects.create(
                    rater_id=rater_id,
                    rated_user_id=rated_user_id,
                    ride_id=ride_id,
                    score=score,
                    rating_type=rating_type,
                    comment=comment,
                )
        except IntegrityError as e:
            raise DuplicateRecordError(str(e))
        return _to_rating(row)

    def rating_exists(self, rater_id, rated_user_id, ride_id, rating_type):
        return Rating.objects.filter(
            rater_id=rater_id, rated_user_id=rated_user_id, ride_id=ride_id, rating_type=rating_type
        ).exists()

    def list_ratings_for_user(self, user_id):
        return [_to_rating(row) for row in Rating.objects.filter(rated_user_id=user_id).order_by('created_at')]

    def rating_summary(self, user_id):
        summary = Rating.objects.filter(rated_user_id=user_id).aggregate(avg=Avg('score'), total=Count('id'))
        return summary['avg'], summary['total']

    def add_message(self, sender_id, receiver_id, ride_id, content, message_type):
        row = Message.objects.create(
            sender_id=sender_id,
            receiver_id=receiver_id,
            ride_id=ride_id,
            content=content,
            message_type=message_type,
        )
        return _to_message(row)

    def list_conversation(self, user_a, user_b, ride_id):
        rows = Message.objects.filter(ride_id=ride_id).filter(
            Q(sender_id=user_a, receiver_id=user_b) | Q(sender_id=user_b, receiver_id=user_a)
        ).order_by('created_at')
        return [_to_message(row) for row in rows]

    def mark_messages_read(self, reader_id, ride_id):
        return Message.objects.filter(receiver_id=reader_id, ride_id=ride_id, is_read=False).update(is_read=True)

    def count_unread_messages(self, user_id):
        return Message.objects.filter(receiver_id=user_id, is_read=False).count()

    def add_notification(self, user_id, notification_type, title, message, data):
        row = Notification.objects.create(
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            data=data or {},
        )
        return _to_notification(row)

    def list_notifications(self, user_id, unread_only=False):
        rows = Notification.objects.filter(user_id=user_id)
        if unread_only:
            rows = rows.filter(is_read=False)
        return [_to_notification(row) for row in rows.order_by('-created_at')]

    def mark_notification_read(self, notification_id, user_id):
        try:
            return Notification.objects.filter(id=notification_id, user_id=user_id).update(is_read=True) > 0
        except LOOKUP_ERRORS:
            return False

    def mark_all_notifications_read(self, user_id):
        return Notification.objects.filter(user_id=user_id, is_read=False).update(is_read=True)

    def count_unread_notifications(self, user_id):
        return Notification.objects.filter(user_id=user_id, is_read=False).count()
