from django.contrib import admin
from .models import Service, ServiceMaterial


class ServiceMaterialInline(admin.TabularInline):
    model = ServiceMaterial
    extra = 1


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "price",
        "estimated_duration_days",
        "estimated_duration_hours",
        "is_available",
    )
    list_filter = ("category", "is_available")
    search_fields = ("name", "description")
    readonly_fields = ("profit", "created_at", "updated_at")
    inlines = [ServiceMaterialInline]
