"""User-related views: registration and profile"""
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from ..models import Profile
from ..serializers import ProfileSerializer, RegisterSerializer, UserSerializer, UserStatsSerializer
from ..services import AuthService, RideService
from .base import CarpoolAPIMixin, error_response


class RegisterView(CarpoolAPIMixin, viewsets.ViewSet):
    """Sign-up with a university e-mail; returns a JWT pair"""
    permission_classes = [AllowAny]
    authentication_classes = []

    def create(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService().register(**serializer.validated_data)
        if not result.success:
            return error_response(result)

        user = result.value
        refresh = RefreshToken.for_user(user)
        return Response({
            'message': result.message,
            'user': UserSerializer(user).data,
            'tokens': {'refresh': str(refresh), 'access': str(refresh.access_token)},
        }, status=status.HTTP_201_CREATED)


class ProfileView(CarpoolAPIMixin, viewsets.ViewSet):

    def get_profile(self, request):
        return get_object_or_404(Profile.objects.select_related('user'), user=request.user)

    def list(self, request):
        serializer = ProfileSerializer(self.get_profile(request))
        return Response(serializer.data, status=status.HTTP_200_OK)

    def partial_update(self, request):
        serializer = ProfileSerializer(self.get_profile(request), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_200_OK)

    def stats(self, request):
        result = RideService(self.repository).user_stats(request.user.id)
        if not result.success:
            return error_response(result)
        return Response(UserStatsSerializer(result.value).data, status=status.HTTP_200_OK)
