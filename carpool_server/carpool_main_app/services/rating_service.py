"""Rating service - recording ratings and the user rating aggregate"""

import logging

from ..domain import ErrorCode, ServiceResult
from ..repositories import DuplicateRecordError
from ..utils.constants import BusinessRules, NotificationType, RatingType
from .fare_service import round2
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class RatingService:
    """Service for rating operations"""

    def __init__(self, repository, notifications=None):
        self.repository = repository
        self.notifications = notifications or NotificationService(repository)

    def record_rating(self, rater_id, rated_user_id, ride_id, score, rating_type, comment=''):
        """
        Record a 1-5 rating and refresh the rated user's aggregate.

        Returns:
            ServiceResult with the Rating, or INVALID_SCORE, NOT_FOUND,
            DUPLICATE_RATING, INVALID_ARGUMENT
        """
        if isinstance(score, bool) or not isinstance(score, int) or not (
            BusinessRules.MIN_RATING_SCORE <= score <= BusinessRules.MAX_RATING_SCORE
        ):
            return ServiceResult.fail(ErrorCode.INVALID_SCORE)
        if rating_type not in (RatingType.DRIVER, RatingType.PASSENGER):
            return ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, f'Unknown rating type: {rating_type}')
        if self.repository.get_user(rated_user_id) is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'User not found')
        if self.repository.get_ride(ride_id) is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'Ride not found')
        if self.repository.rating_exists(rater_id, rated_user_id, ride_id, rating_type):
            return ServiceResult.fail(ErrorCode.DUPLICATE_RATING)

        try:
            rating = self.repository.add_rating(rater_id, rated_user_id, ride_id, score, rating_type, comment)
        except DuplicateRecordError:
            return ServiceResult.fail(ErrorCode.DUPLICATE_RATING)

        average, total = self.recompute_user_rating(rated_user_id)
        logger.info(f'[RATING] User {rated_user_id} rated {score} on ride {ride_id}, now {average} over {total}')

        self.notifications.notify(
            rated_user_id,
            NotificationType.RATING,
            'New Rating',
            f'You received a {score}-star rating.',
            {'ride_id': str(ride_id), 'rating_id': str(rating.id)},
        )
        return ServiceResult.ok(rating, 'Thanks for your rating!')

    def recompute_user_rating(self, user_id):
        """Recompute mean score and count from all stored ratings; idempotent"""
        average, total = self.repository.rating_summary(user_id)
        rating = round2(average) if average is not None else 0.0
        self.repository.update_user_rating(user_id, rating, total)
        return rating, total

    def ratings_for_user(self, user_id):
        return self.repository.list_ratings_for_user(user_id)
