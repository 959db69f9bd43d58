"""Repositories package - persistence behind the services"""

from .base import RideRepository, DuplicateRecordError
from .memory import InMemoryRideRepository
from .django_orm import DjangoRideRepository

__all__ = [
    'RideRepository',
    'DuplicateRecordError',
    'InMemoryRideRepository',
    'DjangoRideRepository',
]
