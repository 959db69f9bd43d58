"""Rating-related models"""
import uuid

from django.db import models
from django.contrib.auth.models import User
from django.core.validators import MaxValueValidator, MinValueValidator

from ..utils.constants import BusinessRules, RatingType


class Rating(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    rater = models.ForeignKey(User, on_delete=models.CASCADE, related_name='ratings_given')
    rated_user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='ratings_received')
    ride = models.ForeignKey('Ride', on_delete=models.CASCADE, related_name='ratings')
    score = models.PositiveSmallIntegerField(validators=[
        MinValueValidator(BusinessRules.MIN_RATING_SCORE),
        MaxValueValidator(BusinessRules.MAX_RATING_SCORE),
    ])
    comment = models.TextField(blank=True, default='')
    rating_type = models.CharField(max_length=10, choices=RatingType.CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['rater', 'rated_user', 'ride', 'rating_type']
        indexes = [models.Index(fields=['rated_user', 'created_at'], name='rating_user_created_idx')]

    def __str__(self):
        return f"Rating {self.score} for {self.rated_user_id} on {self.ride_id}"
