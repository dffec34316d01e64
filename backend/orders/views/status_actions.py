from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from orders.serializers import (
    UpdateOrderStatusSerializer,
    UpdatePaymentStatusSerializer,
    UpdateDeliveryStatusSerializer,
)
from orders.services import OrderStatusService


class StatusActionsMixin:
    """
    Mixin for the three status-track actions of OrderViewSet (admin only).
    """

    def _handle_status_change(self, request: Request, serializer_class, field, service_method) -> Response:
        """Generic handler for status-changing actions."""
        serializer = serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = service_method(self.get_order(), serializer.validated_data[field])
        return Response(self.serialize_order(order))

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, order_id=None) -> Response:
        """PATCH /api/orders/{order_id}/status/ with {"order_status": ...}"""
        return self._handle_status_change(
            request,
            UpdateOrderStatusSerializer,
            "order_status",
            OrderStatusService.update_order_status,
        )

    @action(detail=True, methods=["patch"], url_path="payment")
    def update_payment(self, request: Request, order_id=None) -> Response:
        """PATCH /api/orders/{order_id}/payment/ with {"payment_status": ...}, COD orders only."""
        return self._handle_status_change(
            request,
            UpdatePaymentStatusSerializer,
            "payment_status",
            OrderStatusService.update_cod_payment_status,
        )

    @action(detail=True, methods=["patch"], url_path="delivery")
    def update_delivery(self, request: Request, order_id=None) -> Response:
        """PATCH /api/orders/{order_id}/delivery/ with {"delivery_status": ...}"""
        return self._handle_status_change(
            request,
            UpdateDeliveryStatusSerializer,
            "delivery_status",
            OrderStatusService.update_delivery_status,
        )
