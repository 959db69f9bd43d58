"""User-related serializers"""
from rest_framework import serializers
from django.contrib.auth.models import User
from ..models import Profile


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name"]


class ProfileSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)
    first_name = serializers.CharField(source='user.first_name', required=False, max_length=150)
    last_name = serializers.CharField(source='user.last_name', required=False, max_length=150)
    display_name = serializers.ReadOnlyField()

    class Meta:
        model = Profile
        fields = ['id', 'user', 'first_name', 'last_name', 'display_name', 'phone_number',
                  'student_id', 'is_verified', 'rating', 'total_ratings']
        read_only_fields = ['student_id', 'is_verified', 'rating', 'total_ratings']

    def update(self, instance, validated_data):
        user_data = validated_data.pop('user', {})
        for field, value in user_data.items():
            setattr(instance.user, field, value)
        if user_data:
            instance.user.save(update_fields=list(user_data))
        return super().update(instance, validated_data)


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    student_id = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')


class UserStatsSerializer(serializers.Serializer):
    rides_as_driver = serializers.IntegerField()
    rides_as_passenger = serializers.IntegerField()
    completed_rides = serializers.IntegerField()
    rating = serializers.FloatField()
    total_ratings = serializers.IntegerField()
    money_saved = serializers.FloatField()
