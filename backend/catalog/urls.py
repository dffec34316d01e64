from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import ServiceViewSet

app_name = "catalog"

router = SimpleRouter()
router.register(r"", ServiceViewSet, basename="service")

urlpatterns = [
    path("", include(router.urls)),
]
