"""Ride-related serializers"""
from rest_framework import serializers

from ..domain import CreateRideData, Location, RidePreferences, SearchCriteria
from ..utils.constants import GenderPreference, RideType


class LocationSerializer(serializers.Serializer):
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100, allow_blank=True, required=False, default='')
    latitude = serializers.FloatField(required=False, allow_null=True, default=None)
    longitude = serializers.FloatField(required=False, allow_null=True, default=None)


class RidePreferencesSerializer(serializers.Serializer):
    smoking_allowed = serializers.BooleanField(required=False, default=False)
    pets_allowed = serializers.BooleanField(required=False, default=False)
    music_allowed = serializers.BooleanField(required=False, default=True)
    gender_preference = serializers.ChoiceField(
        choices=GenderPreference.CHOICES, required=False, default=GenderPreference.ANY
    )


class RideSerializer(serializers.Serializer):
    """Read-only representation of a domain Ride"""
    id = serializers.ReadOnlyField()
    type = serializers.CharField(source='kind', read_only=True)
    owner_id = serializers.ReadOnlyField()
    origin = LocationSerializer(read_only=True)
    destination = LocationSerializer(read_only=True)
    departure_time = serializers.DateTimeField(read_only=True)
    seat_capacity = serializers.IntegerField(read_only=True)
    available_seats = serializers.IntegerField(read_only=True)
    cost_per_seat = serializers.FloatField(read_only=True)
    description = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    preferences = RidePreferencesSerializer(read_only=True)
    passenger_ids = serializers.ListField(child=serializers.ReadOnlyField(), read_only=True)
    created_at = serializers.DateTimeField(read_only=True)


class RideCreateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=RideType.CHOICES)
    origin = LocationSerializer()
    destination = LocationSerializer()
    departure_time = serializers.DateTimeField()
    seat_capacity = serializers.IntegerField(min_value=1)
    cost_per_seat = serializers.FloatField(min_value=0)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    preferences = RidePreferencesSerializer(required=False)

    def to_ride_data(self):
        data = self.validated_data
        return CreateRideData(
            ride_type=data['type'],
            origin=Location(**data['origin']),
            destination=Location(**data['destination']),
            departure_time=data['departure_time'],
            seat_capacity=data['seat_capacity'],
            cost_per_seat=data['cost_per_seat'],
            description=data['description'],
            preferences=RidePreferences(**data.get('preferences', {})),
        )


class RideSearchSerializer(serializers.Serializer):
    """Validates search query parameters; every field is optional"""
    from_city = serializers.CharField(required=False)
    to_city = serializers.CharField(required=False)
    departure_date = serializers.DateField(required=False)
    max_cost_per_seat = serializers.FloatField(required=False, min_value=0)
    available_seats = serializers.IntegerField(required=False, min_value=1)
    gender_preference = serializers.ChoiceField(choices=GenderPreference.CHOICES, required=False)
    type = serializers.ChoiceField(choices=RideType.CHOICES, required=False)

    def to_criteria(self):
        data = self.validated_data
        # "any" on the search form means no gender filter
        gender = data.get('gender_preference')
        if gender == GenderPreference.ANY:
            gender = None
        return SearchCriteria(
            from_city=data.get('from_city'),
            to_city=data.get('to_city'),
            departure_date=data.get('departure_date'),
            max_cost_per_seat=data.get('max_cost_per_seat'),
            available_seats=data.get('available_seats'),
            gender_preference=gender,
            ride_type=data.get('type'),
        )


class PassengerShareSerializer(serializers.Serializer):
    user_id = serializers.ReadOnlyField()
    amount = serializers.FloatField()


class CostBreakdownSerializer(serializers.Serializer):
    total_cost = serializers.FloatField()
    cost_per_seat = serializers.FloatField()
    passenger_count = serializers.IntegerField()
    driver_share = serializers.FloatField()
    passenger_shares = PassengerShareSerializer(many=True)


class JoinRideSerializer(serializers.Serializer):
    message = serializers.CharField(required=False, allow_blank=True, default='', max_length=500)


class JoinRequestSerializer(serializers.Serializer):
    id = serializers.ReadOnlyField()
    passenger_id = serializers.ReadOnlyField()
    ride_id = serializers.ReadOnlyField()
    status = serializers.CharField()
    requested_seats = serializers.IntegerField()
    message = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class FareEstimateSerializer(serializers.Serializer):
    distance_km = serializers.FloatField()
    duration_minutes = serializers.FloatField()
    seat_count = serializers.IntegerField()
    fuel_efficiency = serializers.FloatField(required=False)
    fuel_price = serializers.FloatField(required=False)
    profit_margin = serializers.FloatField(required=False)
