from rest_framework import permissions

from core_backend.base import ReadOnlyBaseViewSet
from .filters import ServiceFilter
from .models import Service
from .serializers import ServiceSerializer


class ServiceViewSet(ReadOnlyBaseViewSet):
    """
    Public catalog of laundry services. Writes go through the Django admin.
    """

    queryset = Service.objects.all()
    serializer_class = ServiceSerializer
    permission_classes = [permissions.AllowAny]
    filterset_class = ServiceFilter
    search_fields = ["name", "description", "category"]
    ordering_fields = ["name", "price", "created_at"]
    ordering = ["name"]

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["view_mode"] = "list" if self.action == "list" else "detail"
        return context
