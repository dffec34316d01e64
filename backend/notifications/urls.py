from django.urls import path
from .views import NotificationViewSet

app_name = "notifications"

urlpatterns = [
    path("", NotificationViewSet.as_view({"get": "list"}), name="notification-list"),
    path(
        "unread-count/",
        NotificationViewSet.as_view({"get": "unread_count"}),
        name="notification-unread-count",
    ),
    path(
        "<int:pk>/",
        NotificationViewSet.as_view({"delete": "destroy"}),
        name="notification-detail",
    ),
    path(
        "<int:pk>/read/",
        NotificationViewSet.as_view({"patch": "read"}),
        name="notification-read",
    ),
]
