from django.urls import path
from . import views

app_name = 'business_hours'

urlpatterns = [
    # Public API endpoints (no auth required)
    path('status/', views.BusinessHoursStatusView.as_view(), name='status'),
]
