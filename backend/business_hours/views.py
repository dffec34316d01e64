from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .services import BusinessHoursService
from .serializers import BusinessHoursStatusSerializer


# Public API Views (no authentication required)
class BusinessHoursStatusView(APIView):
    """Get current order admission status"""
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        summary = BusinessHoursService.get_status_summary()
        serializer = BusinessHoursStatusSerializer(summary)
        return Response(serializer.data)
