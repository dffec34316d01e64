from rest_framework import serializers

from catalog.serializers import ServiceSerializer
from .models import Cart, CartItem


class CartItemSerializer(serializers.ModelSerializer):
    """
    Serializer for cart lines with current catalog pricing.
    """
    service = ServiceSerializer(read_only=True, context={"view_mode": "list"})
    total_price = serializers.SerializerMethodField()

    class Meta:
        model = CartItem
        fields = ["id", "service", "qty", "total_price", "added_at", "updated_at"]
        read_only_fields = fields

    def get_total_price(self, obj):
        return str(obj.get_total_price())


class CartSerializer(serializers.ModelSerializer):
    items = CartItemSerializer(many=True, read_only=True)
    subtotal = serializers.SerializerMethodField()

    class Meta:
        model = Cart
        fields = ["id", "user", "items", "subtotal", "created_at", "updated_at"]
        read_only_fields = fields

    def get_subtotal(self, obj):
        return str(obj.calculate_subtotal())


class AddToCartSerializer(serializers.Serializer):
    service_id = serializers.IntegerField()
    qty = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    qty = serializers.IntegerField(min_value=1)
