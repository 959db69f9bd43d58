"""Ride-related views using the ride and matching services"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsRideOwner, IsVerifiedStudent
from ..serializers import (
    CostBreakdownSerializer, FareEstimateSerializer, JoinRequestSerializer,
    JoinRideSerializer, RideCreateSerializer, RideSearchSerializer, RideSerializer,
)
from ..services import FareOptions, RideMatchingService, RideService
from ..services import fare_service
from .base import CarpoolAPIMixin, error_response, not_found

TRUTHY = ('1', 'true', 'yes')


class RideViewSet(CarpoolAPIMixin, viewsets.ViewSet):
    """Search, create and manage rides"""

    def get_permissions(self):
        if self.action in ('create', 'join'):
            return [IsAuthenticated(), IsVerifiedStudent()]
        if self.action in ('complete', 'cancel'):
            return [IsAuthenticated(), IsRideOwner()]
        return super().get_permissions()

    def list(self, request):
        """Search active rides, excluding the caller's own and joined rides"""
        serializer = RideSearchSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        rides = RideMatchingService(self.repository).search(request.user.id, serializer.to_criteria())
        return Response(RideSerializer(rides, many=True).data, status=status.HTTP_200_OK)

    def create(self, request):
        serializer = RideCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = RideService(self.repository).create_ride(request.user.id, serializer.to_ride_data())
        if not result.success:
            return error_response(result)
        return Response(RideSerializer(result.value).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        ride = self.repository.get_ride(pk)
        if ride is None:
            return not_found('Ride not found')
        return Response(RideSerializer(ride).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='mine')
    def mine(self, request):
        rides = RideService(self.repository).rides_for_user(request.user.id)
        return Response(RideSerializer(rides, many=True).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='join')
    def join(self, request, pk=None):
        serializer = JoinRideSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = RideMatchingService(self.repository).request_to_join(
            request.user.id, pk, serializer.validated_data['message']
        )
        if not result.success:
            return error_response(result)
        return Response(
            {'message': result.message, 'request': JoinRequestSerializer(result.value).data},
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['post'], url_path='complete')
    def complete(self, request, pk=None):
        return self._finish(request, pk, RideService(self.repository).complete_ride)

    @action(detail=True, methods=['post'], url_path='cancel')
    def cancel(self, request, pk=None):
        return self._finish(request, pk, RideService(self.repository).cancel_ride)

    def _finish(self, request, pk, operation):
        ride = self.repository.get_ride(pk)
        if ride is None:
            return not_found('Ride not found')
        self.check_object_permissions(request, ride)

        result = operation(ride.id)
        if not result.success:
            return error_response(result)
        return Response(
            {'message': result.message, 'ride': RideSerializer(result.value).data},
            status=status.HTTP_200_OK,
        )

    @action(detail=True, methods=['get'], url_path='cost-split')
    def cost_split(self, request, pk=None):
        include_driver = request.query_params.get('include_driver', '').lower() in TRUTHY
        result = RideService(self.repository).cost_breakdown(pk, include_driver_in_split=include_driver)
        if not result.success:
            return error_response(result)

        ride = self.repository.get_ride(pk)
        owner = self.repository.get_user(ride.owner_id)
        data = CostBreakdownSerializer(result.value).data
        data['summary'] = fare_service.payment_summary(result.value, owner.display_name if owner else 'the driver')
        return Response(data, status=status.HTTP_200_OK)


class RideRequestViewSet(CarpoolAPIMixin, viewsets.ViewSet):
    """Join requests the caller sent and received; owners approve or reject"""

    def list(self, request):
        requests = RideMatchingService(self.repository).requests_for_user(request.user.id)
        return Response({
            'sent': JoinRequestSerializer(requests['sent'], many=True).data,
            'received': JoinRequestSerializer(requests['received'], many=True).data,
        }, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='approve')
    def approve(self, request, pk=None):
        return self._decide(request, pk, approve=True)

    @action(detail=True, methods=['post'], url_path='reject')
    def reject(self, request, pk=None):
        return self._decide(request, pk, approve=False)

    def _decide(self, request, pk, approve):
        join_request = self.repository.get_join_request(pk)
        if join_request is None:
            return not_found('Ride request not found')
        ride = self.repository.get_ride(join_request.ride_id)
        if ride is None:
            return not_found('Ride not found')
        if ride.owner_id != request.user.id:
            return Response(
                {'error': 'Only the ride owner can respond to this request'},
                status=status.HTTP_403_FORBIDDEN,
            )

        service = RideMatchingService(self.repository)
        result = service.approve_request(pk) if approve else service.reject_request(pk)
        if not result.success:
            return error_response(result)
        return Response(
            {'message': result.message, 'request': JoinRequestSerializer(result.value).data},
            status=status.HTTP_200_OK,
        )


class FareEstimateViewSet(CarpoolAPIMixin, viewsets.ViewSet):
    """Suggested seat price for a planned trip"""

    @action(detail=False, methods=['post'], url_path='estimate')
    def estimate(self, request):
        serializer = FareEstimateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        overrides = {
            key: data[key] for key in ('fuel_efficiency', 'fuel_price', 'profit_margin') if key in data
        }
        options = FareOptions(**overrides)
        suggested = fare_service.suggested_price_per_seat(
            data['distance_km'], data['duration_minutes'], data['seat_count'], options
        )
        return Response({
            'suggested_price_per_seat': suggested,
            'distance_cost': fare_service.distance_based_cost(
                data['distance_km'], options.fuel_efficiency, options.fuel_price, options.wear_and_tear_rate
            ),
            'time_cost': fare_service.time_based_cost(data['duration_minutes'], options.time_value),
            'formatted_price': fare_service.format_currency(suggested),
        }, status=status.HTTP_200_OK)
