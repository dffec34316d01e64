"""
Webhook view for the payment gateway.
"""

import logging

from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import GatewayNotificationSerializer
from .services import PaymentGatewayService

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class PaymentNotificationView(APIView):
    """
    Receives transaction status notifications from the payment gateway and
    applies them to the order's payment track.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = GatewayNotificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = PaymentGatewayService.handle_notification(serializer.validated_data)
        return Response(
            {"order_id": order.order_id, "payment_status": order.payment_status},
            status=status.HTTP_200_OK,
        )
