"""
Customer cart endpoints. Only users with the customer role have a cart.
"""

import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from users.permissions import IsCustomerRole
from .serializers import CartSerializer, AddToCartSerializer, UpdateCartItemSerializer
from .services import CartService

logger = logging.getLogger(__name__)


class CartViewSet(viewsets.ViewSet):
    """
    Routes (see cart/urls.py):
    - GET /api/cart/ - Retrieve current cart
    - POST /api/cart/add-item/ - Add a service to the cart
    - PATCH /api/cart/update-quantity/{service_id}/ - Set a line's quantity
    - DELETE /api/cart/remove-item/{service_id}/ - Remove a line
    - DELETE /api/cart/clear/ - Clear all lines
    """

    permission_classes = [IsCustomerRole]

    def _cart_response(self, cart, status_code=status.HTTP_200_OK):
        cart.refresh_from_db()
        return Response(CartSerializer(cart).data, status=status_code)

    def retrieve(self, request):
        """
        GET /api/cart/

        An empty cart is created on first access.
        """
        cart = CartService.get_or_create_cart(request.user)
        return Response(CartSerializer(cart).data)

    @action(detail=False, methods=['post'], url_path='add-item')
    def add_item(self, request):
        """
        POST /api/cart/add-item/

        Request body:
        {
            "service_id": 1,
            "qty": 2
        }
        """
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = CartService.add_item(
            request.user,
            serializer.validated_data['service_id'],
            serializer.validated_data['qty'],
        )
        return self._cart_response(cart, status.HTTP_201_CREATED)

    @action(detail=False, methods=['patch'], url_path=r'update-quantity/(?P<service_id>\d+)')
    def update_quantity(self, request, service_id=None):
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = CartService.update_item_quantity(
            request.user, int(service_id), serializer.validated_data['qty']
        )
        return self._cart_response(cart)

    @action(detail=False, methods=['delete'], url_path=r'remove-item/(?P<service_id>\d+)')
    def remove_item(self, request, service_id=None):
        cart = CartService.remove_item(request.user, int(service_id))
        return self._cart_response(cart)

    @action(detail=False, methods=['delete'], url_path='clear')
    def clear(self, request):
        cart = CartService.clear_cart(request.user)
        return self._cart_response(cart)
