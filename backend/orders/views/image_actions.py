from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from orders.serializers import AttachImagesSerializer, OrderItemSerializer
from orders.services import OrderService


class ImageActionsMixin:
    """
    Before/after service photos for a single line of an order (admin only).
    Files are uploaded elsewhere; these endpoints store the resulting links.
    """

    def _attach(self, request: Request, stage: str) -> Response:
        serializer = AttachImagesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = OrderService.attach_images(
            self.get_order(),
            serializer.validated_data["service_id"],
            serializer.validated_data["images"],
            stage,
        )
        return Response(OrderItemSerializer(item).data)

    @action(detail=True, methods=["post"], url_path="before-service-images")
    def before_service_images(self, request: Request, order_id=None) -> Response:
        return self._attach(request, "before")

    @action(detail=True, methods=["post"], url_path="after-service-images")
    def after_service_images(self, request: Request, order_id=None) -> Response:
        return self._attach(request, "after")
