import logging

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import ReadOnlyBaseViewSet
from orders.filters import OrderFilter
from orders.serializers import (
    OrderSerializer,
    OrderCreateSerializer,
    OrderFromCartSerializer,
)
from orders.services import OrderService
from users.permissions import IsAdminRole, IsCustomerRole

from .image_actions import ImageActionsMixin
from .status_actions import StatusActionsMixin

logger = logging.getLogger(__name__)


class OrderViewSet(StatusActionsMixin, ImageActionsMixin, ReadOnlyBaseViewSet):
    """
    Orders API.

    - GET    /api/orders/                       all orders (admin)
    - POST   /api/orders/                       create from line items (customer)
    - POST   /api/orders/from-cart/             create from selected cart lines (customer)
    - GET    /api/orders/my-orders/             own orders (customer)
    - GET    /api/orders/{order_id}/            owner or admin
    - DELETE /api/orders/{order_id}/            admin
    - PATCH  /api/orders/{order_id}/status|payment|delivery/   admin
    - POST   /api/orders/{order_id}/before-service-images|after-service-images/   admin
    """

    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    search_fields = ["order_id", "user__name", "user__email", "phone"]
    ordering_fields = ["created_at", "total", "estimated_finish_time"]
    ordering = ["-created_at", "-id"]
    lookup_field = "order_id"
    lookup_value_regex = "[^/]+"

    CUSTOMER_ACTIONS = {"create", "from_cart", "my_orders"}

    def get_queryset(self):
        return OrderService.list_orders()

    def get_permissions(self):
        if self.action in self.CUSTOMER_ACTIONS:
            return [IsCustomerRole()]
        if self.action == "retrieve":
            return [IsAuthenticated()]
        return [IsAdminRole()]

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["view_mode"] = "list" if self.action in ("list", "my_orders") else "detail"
        return context

    def get_order(self):
        return OrderService.get_order(self.kwargs[self.lookup_field])

    def serialize_order(self, order):
        order = OrderService.get_order(order.order_id)
        return OrderSerializer(
            order, context={"request": self.request, "view_mode": "detail"}
        ).data

    def retrieve(self, request: Request, *args, **kwargs) -> Response:
        order = OrderService.get_order_for_user(kwargs[self.lookup_field], request.user)
        return Response(self.serialize_order(order))

    def create(self, request: Request, *args, **kwargs) -> Response:
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.create_order(request.user, serializer.validated_data)
        return Response(self.serialize_order(order), status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="from-cart")
    def from_cart(self, request: Request) -> Response:
        serializer = OrderFromCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.create_order_from_cart(request.user, serializer.validated_data)
        return Response(self.serialize_order(order), status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"], url_path="my-orders")
    def my_orders(self, request: Request) -> Response:
        queryset = self.filter_queryset(OrderService.list_orders_for_user(request.user))
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(queryset, many=True).data)

    def destroy(self, request: Request, *args, **kwargs) -> Response:
        OrderService.delete_order(self.get_order())
        return Response(status=status.HTTP_204_NO_CONTENT)
