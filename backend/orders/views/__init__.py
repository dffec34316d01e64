"""
Orders views package - viewset with action mixins.
"""

from .order_viewset import OrderViewSet

__all__ = [
    'OrderViewSet',
]
