"""
Orders serializers package.
"""

from .order_serializers import (
    ImageSerializer,
    OrderItemSerializer,
    OrderSerializer,
    OrderLineItemSerializer,
    OrderCreateSerializer,
    OrderFromCartSerializer,
)

from .status_serializers import (
    UpdateOrderStatusSerializer,
    UpdatePaymentStatusSerializer,
    UpdateDeliveryStatusSerializer,
    AttachImagesSerializer,
)

__all__ = [
    # Orders
    'ImageSerializer',
    'OrderItemSerializer',
    'OrderSerializer',
    'OrderLineItemSerializer',
    'OrderCreateSerializer',
    'OrderFromCartSerializer',
    # Status / images
    'UpdateOrderStatusSerializer',
    'UpdatePaymentStatusSerializer',
    'UpdateDeliveryStatusSerializer',
    'AttachImagesSerializer',
]
