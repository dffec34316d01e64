from django.contrib import admin
from .models import Voucher


@admin.register(Voucher)
class VoucherAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "discount_type",
        "discount_value",
        "max_discount",
        "min_purchase",
        "start_date",
        "end_date",
        "usage_count",
        "usage_limit",
        "is_active",
    )
    list_filter = ("discount_type", "is_active")
    search_fields = ("code", "description")
    filter_horizontal = ("applicable_services", "excluded_services", "users")
    readonly_fields = ("usage_count", "created_at", "updated_at")
