"""Join-request models"""
import uuid

from django.db import models
from django.contrib.auth.models import User
from django.core.validators import MinValueValidator

from ..utils.constants import RequestStatus


class RideRequest(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    passenger = models.ForeignKey(User, on_delete=models.CASCADE, related_name='ride_requests')
    ride = models.ForeignKey('Ride', on_delete=models.CASCADE, related_name='join_requests')
    status = models.CharField(max_length=20, choices=RequestStatus.CHOICES, default=RequestStatus.PENDING)
    message = models.TextField(blank=True, default='')
    requested_seats = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['passenger', 'ride'],
                condition=models.Q(status=RequestStatus.PENDING),
                name='one_pending_request_per_ride',
            ),
        ]
        indexes = [models.Index(fields=['ride', 'status'], name='riderequest_ride_status_idx')]

    def __str__(self):
        return f"Request by {self.passenger.username} for {self.ride_id} ({self.status})"
