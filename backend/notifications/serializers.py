from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from .models import NotificationRecipient


class NotificationSerializer(BaseModelSerializer):
    """
    One notification as seen by one recipient.
    """

    id = serializers.IntegerField(source="notification.id", read_only=True)
    type = serializers.CharField(source="notification.type", read_only=True)
    message = serializers.CharField(source="notification.message", read_only=True)
    for_role = serializers.CharField(source="notification.for_role", read_only=True)
    related_order = serializers.SlugRelatedField(
        source="notification.related_order", slug_field="order_id", read_only=True
    )
    related_voucher = serializers.SlugRelatedField(
        source="notification.related_voucher", slug_field="code", read_only=True
    )
    created_at = serializers.DateTimeField(source="notification.created_at", read_only=True)

    class Meta:
        model = NotificationRecipient
        fields = [
            "id",
            "type",
            "message",
            "for_role",
            "related_order",
            "related_voucher",
            "is_read",
            "created_at",
        ]
        read_only_fields = fields
