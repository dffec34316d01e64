from rest_framework import serializers

from core_backend.base import BaseModelSerializer, FieldsetMixin, TimestampedSerializer
from .models import Service, ServiceMaterial


class ServiceMaterialSerializer(BaseModelSerializer):
    class Meta:
        model = ServiceMaterial
        fields = ["id", "name", "cost"]


class ServiceSerializer(FieldsetMixin, TimestampedSerializer):
    materials = ServiceMaterialSerializer(many=True, read_only=True)
    estimated_duration = serializers.SerializerMethodField()
    profit = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Service
        fields = [
            "id",
            "name",
            "description",
            "category",
            "price",
            "estimated_duration",
            "materials",
            "labor_cost",
            "profit",
            "is_available",
            "note",
            "created_at",
            "updated_at",
        ]
        fieldsets = {
            "list": ["id", "name", "category", "price", "estimated_duration", "is_available"],
            "detail": "__all__",
        }
        prefetch_related_fields = ["materials"]

    def get_estimated_duration(self, obj):
        return {
            "days": obj.estimated_duration_days,
            "hours": obj.estimated_duration_hours,
        }
