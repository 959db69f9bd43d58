from django.urls import path,include
from rest_framework import routers

from .views import (
    RegisterView, ProfileView,
    RideViewSet, RideRequestViewSet, FareEstimateViewSet,
    MessageViewSet, RatingViewSet, NotificationViewSet,
)

router = routers.DefaultRouter()
router.register(r"auth/register", RegisterView, basename="register")
router.register(r"rides", RideViewSet, basename="rides")
router.register(r"ride-requests", RideRequestViewSet, basename="ride-requests")
router.register(r"messages", MessageViewSet, basename="messages")
router.register(r"ratings", RatingViewSet, basename="ratings")
router.register(r"notifications", NotificationViewSet, basename="notifications")
router.register(r"fares", FareEstimateViewSet, basename="fares")

profile_view = ProfileView.as_view({'get': 'list', 'patch': 'partial_update'})
profile_stats_view = ProfileView.as_view({'get': 'stats'})

urlpatterns = [
    path('profile/', profile_view, name='profile'),
    path('profile/stats/', profile_stats_view, name='profile-stats'),
    path('', include(router.urls)),
    path('api-auth/', include('rest_framework.urls')),    # to login in rest_framework
]
