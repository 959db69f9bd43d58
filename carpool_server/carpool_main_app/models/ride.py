"""Ride-related models"""
import uuid

from django.db import models
from django.contrib.auth.models import User
from django.core.validators import MinValueValidator

from ..utils.constants import GenderPreference, RideStatus, RideType


class Ride(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(User, on_delete=models.CASCADE, related_name='rides')
    ride_type = models.CharField(max_length=10, choices=RideType.CHOICES)
    from_address = models.CharField(max_length=255)
    from_city = models.CharField(max_length=100, db_index=True)
    from_state = models.CharField(max_length=50)
    from_latitude = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    from_longitude = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)
    to_address = models.CharField(max_length=255)
    to_city = models.CharField(max_length=100, db_index=True)
    to_state = models.CharField(max_length=50)
    to_latitude = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    to_longitude = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)
    departure_time = models.DateTimeField(db_index=True)
    seat_capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    cost_per_seat = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    description = models.TextField(blank=True, default='')
    status = models.CharField(max_length=20, choices=RideStatus.CHOICES, default=RideStatus.ACTIVE)
    smoking_allowed = models.BooleanField(default=False)
    pets_allowed = models.BooleanField(default=False)
    music_allowed = models.BooleanField(default=True)
    gender_preference = models.CharField(
        max_length=10, choices=GenderPreference.CHOICES, default=GenderPreference.ANY
    )
    passengers = models.ManyToManyField(
        User, through='RidePassenger', related_name='joined_rides', blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['departure_time']
        indexes = [
            models.Index(fields=['status', 'departure_time'], name='ride_status_departure_idx'),
            models.Index(fields=['owner', 'status'], name='ride_owner_status_idx'),
        ]

    def __str__(self):
        return f"{self.from_city} → {self.to_city} ({self.departure_time:%Y-%m-%d %H:%M})"

    @property
    def available_seats(self):
        return self.seat_capacity - self.ride_passengers.count()


class RidePassenger(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ride = models.ForeignKey(Ride, on_delete=models.CASCADE, related_name='ride_passengers')
    passenger = models.ForeignKey(User, on_delete=models.CASCADE, related_name='ride_memberships')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['ride', 'passenger']

    def __str__(self):
        return f"{self.passenger.username} on {self.ride}"
