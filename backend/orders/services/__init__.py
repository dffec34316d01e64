"""
Orders services package.

- OrderService: creation (direct and from cart), queries, images, deletion
- OrderStatusService: payment, fulfilment and delivery status tracks
"""

from .order_service import OrderService
from .status_service import OrderStatusService

__all__ = [
    'OrderService',
    'OrderStatusService',
]
