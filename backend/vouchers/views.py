from rest_framework import permissions, status
from rest_framework.decorators import action
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from users.permissions import IsAdminRole
from .filters import VoucherFilter
from .models import Voucher
from .serializers import (
    VoucherSerializer,
    VoucherValidateSerializer,
    VoucherPreviewSerializer,
)
from .services import VoucherService


class VoucherViewSet(BaseViewSet):
    """
    Admin CRUD for vouchers, plus public lookup by code and a preview
    endpoint that prices a selection without redeeming.
    """

    queryset = Voucher.objects.all()
    serializer_class = VoucherSerializer
    filterset_class = VoucherFilter
    search_fields = ["code", "description"]
    ordering_fields = ["created_at", "start_date", "end_date", "code"]
    ordering = ["-created_at"]

    def get_permissions(self):
        if self.action == "by_code":
            return [permissions.AllowAny()]
        if self.action == "validate":
            return [permissions.IsAuthenticated()]
        return [IsAdminRole()]

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["view_mode"] = "public" if self.action == "by_code" else "detail"
        return context

    def perform_create(self, serializer):
        serializer.instance = VoucherService.create_voucher(dict(serializer.validated_data))

    def perform_update(self, serializer):
        serializer.instance = VoucherService.update_voucher(
            serializer.instance, dict(serializer.validated_data)
        )

    def perform_destroy(self, instance):
        VoucherService.delete_voucher(instance)

    @action(detail=False, methods=["get"], url_path=r"code/(?P<code>[^/]+)")
    def by_code(self, request, code=None):
        voucher = VoucherService.get_by_code(code)
        return Response(self.get_serializer(voucher).data)

    @action(detail=False, methods=["post"])
    def validate(self, request):
        serializer = VoucherValidateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = VoucherService.preview(
            serializer.validated_data["code"],
            request.user,
            serializer.validated_data["services"],
        )
        return Response(VoucherPreviewSerializer(result).data, status=status.HTTP_200_OK)
