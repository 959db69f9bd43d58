"""Message service - ride chat between students"""

from ..domain import ErrorCode, ServiceResult
from ..utils.constants import MessageType, NotificationType
from .notification_service import NotificationService


class MessageService:
    """Append-only messages; only the read flag ever changes"""

    def __init__(self, repository, notifications=None):
        self.repository = repository
        self.notifications = notifications or NotificationService(repository)

    def send_message(self, sender_id, receiver_id, ride_id, content, message_type=MessageType.TEXT):
        content = (content or '').strip()
        if not content:
            return ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, 'Message cannot be empty')
        if message_type not in (MessageType.TEXT, MessageType.SYSTEM):
            return ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, f'Unknown message type: {message_type}')
        if sender_id == receiver_id:
            return ServiceResult.fail(ErrorCode.INVALID_ARGUMENT, 'You cannot message yourself')

        ride = self.repository.get_ride(ride_id)
        if ride is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'Ride not found')
        sender = self.repository.get_user(sender_id)
        if sender is None or self.repository.get_user(receiver_id) is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, 'User not found')

        message = self.repository.add_message(sender_id, receiver_id, ride.id, content, message_type)
        self.notifications.notify(
            receiver_id,
            NotificationType.MESSAGE,
            'New Message',
            f'{sender.display_name} sent you a message',
            {'ride_id': str(ride.id), 'message_id': str(message.id)},
        )
        return ServiceResult.ok(message)

    def conversation(self, user_a, user_b, ride_id):
        return self.repository.list_conversation(user_a, user_b, ride_id)

    def mark_conversation_read(self, reader_id, ride_id):
        return self.repository.mark_messages_read(reader_id, ride_id)

    def unread_count(self, user_id):
        return self.repository.count_unread_messages(user_id)
