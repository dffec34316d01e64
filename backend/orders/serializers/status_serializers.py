from rest_framework import serializers

from orders.models import Order


class UpdateOrderStatusSerializer(serializers.Serializer):
    order_status = serializers.ChoiceField(choices=Order.OrderStatus.choices)


class UpdatePaymentStatusSerializer(serializers.Serializer):
    """Allowed values are checked by OrderStatusService (pending/settlement for COD)."""

    payment_status = serializers.ChoiceField(choices=Order.PaymentStatus.choices)


class UpdateDeliveryStatusSerializer(serializers.Serializer):
    delivery_status = serializers.ChoiceField(choices=Order.DeliveryStatus.choices)


class AttachImagesSerializer(serializers.Serializer):
    """
    `images` items may be plain links or {"link": ...} objects.
    """

    service_id = serializers.IntegerField()
    images = serializers.ListField(child=serializers.JSONField(), allow_empty=True)
