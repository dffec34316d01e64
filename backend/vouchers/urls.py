from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import VoucherViewSet

app_name = "vouchers"

router = SimpleRouter()
router.register(r"", VoucherViewSet, basename="voucher")

urlpatterns = [
    path("", include(router.urls)),
]
