"""
Shared base classes for the API: viewsets with standard pagination and
filtering, and serializers with view-mode fieldsets.
"""

from .mixins import OptimizedQuerysetMixin
from .serializers import BaseModelSerializer, FieldsetMixin, TimestampedSerializer
from .viewsets import BaseViewSet, ReadOnlyBaseViewSet

__all__ = [
    "BaseViewSet",
    "ReadOnlyBaseViewSet",
    "BaseModelSerializer",
    "FieldsetMixin",
    "TimestampedSerializer",
    "OptimizedQuerysetMixin",
]
