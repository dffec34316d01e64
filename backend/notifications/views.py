from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core_backend.pagination import StandardPagination
from .serializers import NotificationSerializer
from .services import NotificationService


class NotificationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Read model for the authenticated user's notifications.

    `pk` in the URL is the notification id; every action is scoped to the
    (notification, current user) pair.
    """

    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardPagination

    def get_queryset(self):
        return NotificationService.list_for_user(self.request.user)

    @action(detail=True, methods=["patch"])
    def read(self, request, pk=None):
        receipt = NotificationService.mark_read(pk, request.user)
        return Response(self.get_serializer(receipt).data)

    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        return Response({"unread": NotificationService.unread_count(request.user)})

    def destroy(self, request, pk=None):
        NotificationService.soft_delete(pk, request.user)
        return Response(
            {"message": "Notification deleted successfully"}, status=status.HTTP_200_OK
        )
