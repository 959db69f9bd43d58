from rest_framework.permissions import BasePermission


class IsVerifiedStudent(BasePermission):
    """Registered through a university address (profile verified)"""
    message = 'Only verified students can do this'

    def has_permission(self, request, view):
        profile = getattr(request.user, 'profile', None)
        return bool(profile and profile.is_verified)


class IsRideOwner(BasePermission):
    """Object permission over a domain Ride record"""
    message = 'Only the ride owner can do this'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        return obj.owner_id == request.user.id
