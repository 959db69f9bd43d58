"""Shared helpers for the API views"""
import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..domain import GENERIC_ERROR_MESSAGE, ErrorCode, InvalidArgumentError
from ..repositories import DjangoRideRepository

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NO_CAPACITY: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_REQUEST: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_RATING: status.HTTP_409_CONFLICT,
    ErrorCode.NOT_PENDING: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_SCORE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DOMAIN_NOT_ALLOWED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.RIDE_NOT_ACTIVE: status.HTTP_409_CONFLICT,
    ErrorCode.NOT_AN_OFFER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.OWN_RIDE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ALREADY_JOINED: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_ACCOUNT: status.HTTP_409_CONFLICT,
}


def get_repository():
    return DjangoRideRepository()


def error_response(result):
    """Response for a failed ServiceResult"""
    return Response(
        {'error': result.message, 'code': result.error_code.value},
        status=ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST),
    )


def not_found(message):
    return Response({'error': message, 'code': ErrorCode.NOT_FOUND.value}, status=status.HTTP_404_NOT_FOUND)


class CarpoolAPIMixin:
    """JWT auth, a repository per request and uniform error bodies"""
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]

    @property
    def repository(self):
        if not hasattr(self, '_repository'):
            self._repository = get_repository()
        return self._repository

    def handle_exception(self, exc):
        if isinstance(exc, InvalidArgumentError):
            return Response(
                {'error': str(exc), 'code': ErrorCode.INVALID_ARGUMENT.value},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if isinstance(exc, (APIException, Http404, PermissionDenied)):
            return super().handle_exception(exc)
        logger.exception(f'[API] Unexpected error in {self.__class__.__name__}: {exc}')
        return Response({'error': GENERIC_ERROR_MESSAGE}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
