"""Notification service - in-app notifications"""

import logging

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, repository):
        self.repository = repository

    def notify(self, user_id, notification_type, title, message, data=None):
        """
        Store a notification for a user.

        Delivery is best effort: a failure is logged and ``None`` returned,
        never raised, so the operation that triggered it is not undone.
        """
        try:
            notification = self.repository.add_notification(
                user_id, notification_type, title, message, data or {}
            )
        except Exception:
            logger.exception(f'[NOTIFY] Failed to send {notification_type} notification to user {user_id}')
            return None

        logger.info(f'[NOTIFY] {notification_type} → user {user_id}')
        return notification

    def list_for_user(self, user_id, unread_only=False):
        return self.repository.list_notifications(user_id, unread_only=unread_only)

    def mark_read(self, notification_id, user_id):
        return self.repository.mark_notification_read(notification_id, user_id)

    def mark_all_read(self, user_id):
        return self.repository.mark_all_notifications_read(user_id)

    def unread_count(self, user_id):
        return self.repository.count_unread_notifications(user_id)
