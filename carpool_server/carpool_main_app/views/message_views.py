"""Messaging, rating and notification views"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from ..serializers import (
    ConversationQuerySerializer, MessageCreateSerializer, MessageSerializer,
    NotificationSerializer, RatingCreateSerializer, RatingSerializer,
)
from ..services import MessageService, NotificationService, RatingService
from .base import CarpoolAPIMixin, error_response, not_found


class MessageViewSet(CarpoolAPIMixin, viewsets.ViewSet):

    def list(self, request):
        """Conversation with another user about a ride: ?ride=<id>&with=<user id>"""
        serializer = ConversationQuerySerializer(data={
            'ride': request.query_params.get('ride'),
            'other': request.query_params.get('with'),
        })
        serializer.is_valid(raise_exception=True)

        messages = MessageService(self.repository).conversation(
            request.user.id, serializer.validated_data['other'], serializer.validated_data['ride']
        )
        return Response(MessageSerializer(messages, many=True).data, status=status.HTTP_200_OK)

    def create(self, request):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = MessageService(self.repository).send_message(
            request.user.id, data['receiver'], data['ride'], data['content'], data['message_type']
        )
        if not result.success:
            return error_response(result)
        return Response(MessageSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'], url_path='mark-read')
    def mark_read(self, request):
        ride_id = request.data.get('ride')
        if not ride_id:
            return Response({'error': 'ride is required'}, status=status.HTTP_400_BAD_REQUEST)
        if self.repository.get_ride(ride_id) is None:
            return not_found('Ride not found')

        updated = MessageService(self.repository).mark_conversation_read(request.user.id, ride_id)
        return Response({'updated': updated}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='unread-count')
    def unread_count(self, request):
        count = MessageService(self.repository).unread_count(request.user.id)
        return Response({'count': count}, status=status.HTTP_200_OK)


class RatingViewSet(CarpoolAPIMixin, viewsets.ViewSet):

    def list(self, request):
        user_id = request.query_params.get('user', request.user.id)
        if self.repository.get_user(user_id) is None:
            return not_found('User not found')
        ratings = RatingService(self.repository).ratings_for_user(user_id)
        return Response(RatingSerializer(ratings, many=True).data, status=status.HTTP_200_OK)

    def create(self, request):
        serializer = RatingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data['rated_user'] == request.user.id:
            return Response({'error': 'You cannot rate yourself'}, status=status.HTTP_400_BAD_REQUEST)

        result = RatingService(self.repository).record_rating(
            request.user.id, data['rated_user'], data['ride'], data['score'],
            data['rating_type'], data['comment'],
        )
        if not result.success:
            return error_response(result)
        return Response(RatingSerializer(result.value).data, status=status.HTTP_201_CREATED)


class NotificationViewSet(CarpoolAPIMixin, viewsets.ViewSet):

    def list(self, request):
        unread_only = request.query_params.get('unread', '').lower() in ('1', 'true', 'yes')
        service = NotificationService(self.repository)
        notifications = service.list_for_user(request.user.id, unread_only=unread_only)
        return Response({
            'unread_count': service.unread_count(request.user.id),
            'results': NotificationSerializer(notifications, many=True).data,
        }, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='read')
    def read(self, request, pk=None):
        if not NotificationService(self.repository).mark_read(pk, request.user.id):
            return not_found('Notification not found')
        return Response({'message': 'Notification marked as read'}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='read-all')
    def read_all(self, request):
        updated = NotificationService(self.repository).mark_all_read(request.user.id)
        return Response({'updated': updated}, status=status.HTTP_200_OK)
