from django.urls import path

from .views import PaymentNotificationView

app_name = "payments"

urlpatterns = [
    path("notification/", PaymentNotificationView.as_view(), name="gateway-notification"),
]
