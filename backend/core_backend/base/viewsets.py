from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, viewsets

from ..pagination import StandardPagination
from .mixins import OptimizedQuerysetMixin

DEFAULT_FILTER_BACKENDS = [
    DjangoFilterBackend,
    filters.SearchFilter,
    filters.OrderingFilter,
]


class BaseViewSet(OptimizedQuerysetMixin, viewsets.ModelViewSet):
    """
    ModelViewSet with standard pagination, filter/search/ordering backends
    and serializer-driven query optimization.

        class VoucherViewSet(BaseViewSet):
            queryset = Voucher.objects.all()
            serializer_class = VoucherSerializer
            filterset_class = VoucherFilter
    """

    pagination_class = StandardPagination
    filter_backends = DEFAULT_FILTER_BACKENDS
    ordering = ["-id"]


class ReadOnlyBaseViewSet(OptimizedQuerysetMixin, viewsets.ReadOnlyModelViewSet):
    """Read-only counterpart of BaseViewSet (list + retrieve)."""

    pagination_class = StandardPagination
    filter_backends = DEFAULT_FILTER_BACKENDS
    ordering = ["-id"]
