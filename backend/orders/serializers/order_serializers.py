from rest_framework import serializers

from core_backend.base import BaseModelSerializer, FieldsetMixin, TimestampedSerializer
from orders.models import Order, OrderItem


class ImageSerializer(serializers.Serializer):
    link = serializers.CharField()


class OrderItemSerializer(BaseModelSerializer):
    service_id = serializers.IntegerField(source="service.id", read_only=True)
    service_name = serializers.CharField(source="service.name", read_only=True)
    before_service_images = ImageSerializer(many=True, read_only=True)
    after_service_images = ImageSerializer(many=True, read_only=True)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "service_id",
            "service_name",
            "qty",
            "price_at_order",
            "total_price",
            "before_service_images",
            "after_service_images",
        ]
        select_related_fields = ["service"]


class OrderSerializer(FieldsetMixin, TimestampedSerializer):
    """
    Read serializer for orders.

    view_mode "list" returns the summary columns; "detail" everything,
    including per-track timestamps and line items.
    """

    user = serializers.SerializerMethodField()
    items = OrderItemSerializer(many=True, read_only=True)
    voucher_applied = serializers.SlugRelatedField(slug_field="code", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_id",
            "user",
            "phone",
            "address",
            "delivery_option",
            "payment_method",
            "items",
            "subtotal",
            "discount",
            "shipping_cost",
            "total",
            "voucher_applied",
            "payment_status",
            "payment_status_updated_at",
            "order_status",
            "confirmed_at",
            "received_at",
            "queue_at",
            "processing_at",
            "finished_at",
            "cancelled_at",
            "delivery_status",
            "pickup_scheduled_at",
            "picked_up_at",
            "ready_for_delivery_at",
            "out_for_delivery_at",
            "delivered_at",
            "delivery_failed_at",
            "estimated_finish_time",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        fieldsets = {
            "list": [
                "order_id",
                "user",
                "items",
                "total",
                "payment_status",
                "order_status",
                "delivery_status",
                "estimated_finish_time",
                "created_at",
            ],
            "detail": "__all__",
        }
        select_related_fields = ["user", "voucher_applied"]
        prefetch_related_fields = ["items__service"]

    def get_user(self, obj):
        return {"id": obj.user_id, "name": obj.user.name, "email": obj.user.email}


class _OrderDetailsSerializer(serializers.Serializer):
    """Fields shared by both creation paths."""

    order_id = serializers.CharField(required=False, allow_blank=True, max_length=64)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=20)
    address = serializers.CharField(required=False, allow_blank=True)
    payment_method = serializers.ChoiceField(choices=Order.PaymentMethod.choices)
    delivery_option = serializers.ChoiceField(choices=Order.DeliveryOption.choices)
    shipping_cost = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    voucher_code = serializers.CharField(required=False, allow_blank=True)


class OrderLineItemSerializer(serializers.Serializer):
    service_id = serializers.IntegerField()
    qty = serializers.IntegerField(min_value=1)


class OrderCreateSerializer(_OrderDetailsSerializer):
    services = OrderLineItemSerializer(many=True, allow_empty=False)


class OrderFromCartSerializer(_OrderDetailsSerializer):
    selected_services = serializers.ListField(
        child=serializers.IntegerField(), allow_empty=False
    )
