from rest_framework import serializers

from catalog.models import Service
from core_backend.base import BaseModelSerializer, FieldsetMixin
from core_backend.utils.localtime import get_business_timezone
from users.models import User
from .models import Voucher


class BusinessDateTimeField(serializers.DateTimeField):
    """Naive input is read as business local time; output is rendered in it."""

    def default_timezone(self):
        return get_business_timezone()


class VoucherSerializer(FieldsetMixin, BaseModelSerializer):
    start_date = BusinessDateTimeField()
    end_date = BusinessDateTimeField()
    applicable_services = serializers.PrimaryKeyRelatedField(
        many=True, queryset=Service.objects.all(), required=False
    )
    excluded_services = serializers.PrimaryKeyRelatedField(
        many=True, queryset=Service.objects.all(), required=False
    )
    users = serializers.PrimaryKeyRelatedField(
        many=True, queryset=User.objects.all(), required=False
    )

    class Meta:
        model = Voucher
        fields = [
            "id",
            "code",
            "description",
            "discount_type",
            "discount_value",
            "max_discount",
            "min_purchase",
            "start_date",
            "end_date",
            "usage_limit",
            "usage_count",
            "is_active",
            "applicable_services",
            "excluded_services",
            "users",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "usage_count", "created_at", "updated_at"]
        fieldsets = {
            "public": [
                "id",
                "code",
                "description",
                "discount_type",
                "discount_value",
                "max_discount",
                "min_purchase",
                "start_date",
                "end_date",
                "is_active",
                "applicable_services",
                "excluded_services",
            ],
            "detail": "__all__",
        }
        prefetch_related_fields = ["applicable_services", "excluded_services", "users"]

    def validate_code(self, value):
        code = value.strip().upper()
        if not code:
            raise serializers.ValidationError("Voucher code is required.")
        existing = Voucher.objects.filter(code=code)
        if self.instance is not None:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise serializers.ValidationError("A voucher with this code already exists.")
        return code

    def validate(self, data):
        data = super().validate(data)

        def current(field):
            if field in data:
                return data[field]
            return getattr(self.instance, field, None) if self.instance else None

        start_date = current("start_date")
        end_date = current("end_date")
        if start_date and end_date and end_date <= start_date:
            raise serializers.ValidationError(
                {"end_date": "End date must be after start date"}
            )

        discount_type = current("discount_type")
        discount_value = current("discount_value")
        if discount_value is not None and discount_value <= 0:
            raise serializers.ValidationError(
                {"discount_value": "Discount value must be greater than zero."}
            )
        if (
            discount_type == Voucher.DiscountType.PERCENTAGE
            and discount_value is not None
            and discount_value > 100
        ):
            raise serializers.ValidationError(
                {"discount_value": "Percentage discount cannot exceed 100%."}
            )

        if "applicable_services" in data or "excluded_services" in data:
            applicable = {s.pk for s in data.get("applicable_services", [])}
            excluded = {s.pk for s in data.get("excluded_services", [])}
            if self.instance is not None:
                if "applicable_services" not in data:
                    applicable = set(self.instance.applicable_services.values_list("pk", flat=True))
                if "excluded_services" not in data:
                    excluded = set(self.instance.excluded_services.values_list("pk", flat=True))
            duplicates = sorted(applicable & excluded)
            if duplicates:
                raise serializers.ValidationError(
                    {
                        "excluded_services": (
                            "Services cannot be both applicable and excluded: "
                            + ", ".join(str(pk) for pk in duplicates)
                        )
                    }
                )

        return data


class LineItemSerializer(serializers.Serializer):
    service_id = serializers.IntegerField()
    qty = serializers.IntegerField(min_value=1)


class VoucherValidateSerializer(serializers.Serializer):
    code = serializers.CharField()
    services = LineItemSerializer(many=True, allow_empty=False)


class VoucherPreviewSerializer(serializers.Serializer):
    voucher_id = serializers.IntegerField()
    code = serializers.CharField()
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    discount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
