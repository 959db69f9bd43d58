"""Message, rating and notification serializers"""
from rest_framework import serializers

from ..utils.constants import MessageType, RatingType


class MessageSerializer(serializers.Serializer):
    id = serializers.ReadOnlyField()
    sender_id = serializers.ReadOnlyField()
    receiver_id = serializers.ReadOnlyField()
    ride_id = serializers.ReadOnlyField()
    content = serializers.CharField()
    message_type = serializers.CharField()
    is_read = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class MessageCreateSerializer(serializers.Serializer):
    receiver = serializers.IntegerField()
    ride = serializers.UUIDField()
    content = serializers.CharField(max_length=2000, trim_whitespace=False)
    message_type = serializers.ChoiceField(choices=MessageType.CHOICES, required=False, default=MessageType.TEXT)


class ConversationQuerySerializer(serializers.Serializer):
    ride = serializers.UUIDField()
    other = serializers.IntegerField()


class RatingSerializer(serializers.Serializer):
    id = serializers.ReadOnlyField()
    rater_id = serializers.ReadOnlyField()
    rated_user_id = serializers.ReadOnlyField()
    ride_id = serializers.ReadOnlyField()
    score = serializers.IntegerField()
    rating_type = serializers.CharField()
    comment = serializers.CharField()
    created_at = serializers.DateTimeField()


class RatingCreateSerializer(serializers.Serializer):
    rated_user = serializers.IntegerField()
    ride = serializers.UUIDField()
    # Range is checked by RatingService so the API reports invalid_score
    score = serializers.IntegerField()
    rating_type = serializers.ChoiceField(choices=RatingType.CHOICES)
    comment = serializers.CharField(required=False, allow_blank=True, default='', max_length=1000)


class NotificationSerializer(serializers.Serializer):
    id = serializers.ReadOnlyField()
    type = serializers.CharField()
    title = serializers.CharField()
    message = serializers.CharField()
    data = serializers.DictField()
    is_read = serializers.BooleanField()
    created_at = serializers.DateTimeField()
