import logging
from typing import Iterable, Optional

from django.db import transaction

from core_backend.exceptions import NotificationNotFound
from .models import Notification, NotificationRecipient

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Writes fan-out notifications and serves the per-recipient read model.

    Notifications are written synchronously inside the caller's request;
    consumers poll the list endpoint.
    """

    @staticmethod
    @transaction.atomic
    def notify(
        type: str,
        message: str,
        recipients: Iterable,
        related_order=None,
        related_voucher=None,
        for_role: str = "",
    ) -> Optional[Notification]:
        """
        Create one notification shared by every recipient.

        Returns None (and writes nothing) when there are no recipients.
        """
        unique_recipients = []
        seen = set()
        for user in recipients:
            if user.pk not in seen:
                seen.add(user.pk)
                unique_recipients.append(user)

        if not unique_recipients:
            logger.warning(f"Skipping '{type}' notification with no recipients: {message}")
            return None

        notification = Notification.objects.create(
            type=type,
            message=message,
            for_role=for_role or "",
            related_order=related_order,
            related_voucher=related_voucher,
        )
        NotificationRecipient.objects.bulk_create(
            [
                NotificationRecipient(notification=notification, user=user)
                for user in unique_recipients
            ]
        )

        logger.info(
            f"Notification {notification.id} ({type}) sent to {len(unique_recipients)} recipient(s)"
        )
        return notification

    @staticmethod
    def notify_user(user, type: str, message: str, related_order=None, related_voucher=None):
        return NotificationService.notify(
            type,
            message,
            [user],
            related_order=related_order,
            related_voucher=related_voucher,
            for_role=user.role,
        )

    @staticmethod
    def list_for_user(user):
        """Recipient rows for `user`, newest first, excluding soft-deleted ones."""
        return (
            NotificationRecipient.objects.filter(user=user, is_deleted=False)
            .select_related(
                "notification",
                "notification__related_order",
                "notification__related_voucher",
            )
            .order_by("-notification__created_at", "-notification_id")
        )

    @staticmethod
    def unread_count(user) -> int:
        return NotificationRecipient.objects.filter(
            user=user, is_deleted=False, is_read=False
        ).count()

    @staticmethod
    def mark_read(notification_id, user) -> NotificationRecipient:
        updated = NotificationRecipient.objects.filter(
            notification_id=notification_id, user=user, is_deleted=False
        ).update(is_read=True)
        if not updated:
            raise NotificationNotFound()
        return NotificationRecipient.objects.select_related("notification").get(
            notification_id=notification_id, user=user, is_deleted=False
        )

    @staticmethod
    def soft_delete(notification_id, user) -> None:
        updated = NotificationRecipient.objects.filter(
            notification_id=notification_id, user=user
        ).update(is_deleted=True)
        if not updated:
            raise NotificationNotFound()
        logger.info(f"User {user.pk} deleted notification {notification_id}")
