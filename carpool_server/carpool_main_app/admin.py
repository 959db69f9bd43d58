from django.contrib import admin
from .models import (
    Profile, Ride, RidePassenger, RideRequest, Message, Notification, Rating
)

# Customize admin site
admin.site.site_header = "Campus Carpool Administration"
admin.site.site_title = "Campus Carpool Admin"
admin.site.index_title = "Welcome to Campus Carpool Admin Panel"


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'get_email', 'student_id', 'is_verified', 'rating', 'total_ratings']
    list_filter = ['is_verified']
    search_fields = ['user__username', 'user__email', 'user__first_name', 'user__last_name', 'student_id']
    ordering = ['id']
    list_per_page = 50

    def get_email(self, obj):
        return obj.user.email
    get_email.short_description = 'Email'
    get_email.admin_order_field = 'user__email'


class RidePassengerInline(admin.TabularInline):
    model = RidePassenger
    extra = 0
    readonly_fields = ['joined_at']


@admin.register(Ride)
class RideAdmin(admin.ModelAdmin):
    list_display = ['id', 'ride_type', 'owner', 'from_city', 'to_city', 'departure_time',
                    'seat_capacity', 'cost_per_seat', 'status', 'created_at']
    list_filter = ['ride_type', 'status', 'gender_preference', 'departure_time']
    search_fields = ['from_city', 'to_city', 'from_address', 'to_address', 'owner__username', 'owner__email']
    ordering = ['-departure_time']
    date_hierarchy = 'departure_time'
    list_per_page = 50
    readonly_fields = ['created_at', 'updated_at']
    inlines = [RidePassengerInline]


@admin.register(RideRequest)
class RideRequestAdmin(admin.ModelAdmin):
    list_display = ['id', 'passenger', 'ride', 'status', 'requested_seats', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['passenger__username', 'passenger__email']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['id', 'sender', 'receiver', 'ride', 'message_type', 'is_read', 'created_at']
    list_filter = ['message_type', 'is_read']
    search_fields = ['sender__username', 'receiver__username', 'content']
    ordering = ['-created_at']


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'type', 'title', 'is_read', 'created_at']
    list_filter = ['type', 'is_read']
    search_fields = ['user__username', 'title']
    ordering = ['-created_at']


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ['id', 'rater', 'rated_user', 'ride', 'score', 'rating_type', 'created_at']
    list_filter = ['rating_type', 'score']
    search_fields = ['rater__username', 'rated_user__username']
    ordering = ['-created_at']
