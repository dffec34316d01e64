"""
URL configuration for cart app.
"""

from django.urls import path
from .views import CartViewSet

app_name = 'cart'

urlpatterns = [
    # GET /api/cart/ - Retrieve current cart
    path('', CartViewSet.as_view({'get': 'retrieve'}), name='cart-detail'),

    # POST /api/cart/add-item/ - Add a service to the cart
    path('add-item/', CartViewSet.as_view({'post': 'add_item'}), name='cart-add-item'),

    # PATCH /api/cart/update-quantity/{service_id}/ - Set a line's quantity
    path(
        'update-quantity/<int:service_id>/',
        CartViewSet.as_view({'patch': 'update_quantity'}),
        name='cart-update-quantity',
    ),

    # DELETE /api/cart/remove-item/{service_id}/ - Remove a line
    path(
        'remove-item/<int:service_id>/',
        CartViewSet.as_view({'delete': 'remove_item'}),
        name='cart-remove-item',
    ),

    # DELETE /api/cart/clear/ - Clear all lines
    path('clear/', CartViewSet.as_view({'delete': 'clear'}), name='cart-clear'),
]
