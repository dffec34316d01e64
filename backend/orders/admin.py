from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("price_at_order", "get_line_item_total")
    fields = (
        "service",
        "qty",
        "price_at_order",
        "get_line_item_total",
        "before_service_images",
        "after_service_images",
    )

    def get_line_item_total(self, obj):
        return f"{obj.total_price:,.2f}"

    get_line_item_total.short_description = "Line Item Total"

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Back-office view of orders. Status changes should go through the API so
    that timestamps and notifications are written.
    """

    list_display = (
        "order_id",
        "user",
        "total",
        "payment_method",
        "payment_status",
        "order_status",
        "delivery_status",
        "estimated_finish_time",
        "created_at",
    )
    list_display_links = ("order_id",)
    list_filter = ("order_status", "payment_status", "delivery_status", "payment_method")
    search_fields = ("order_id", "user__email", "user__name", "phone")
    ordering = ("-created_at",)
    readonly_fields = (
        "order_id",
        "subtotal",
        "discount",
        "shipping_cost",
        "total",
        "voucher_applied",
        "payment_status_updated_at",
        "confirmed_at",
        "received_at",
        "queue_at",
        "processing_at",
        "finished_at",
        "cancelled_at",
        "pickup_scheduled_at",
        "picked_up_at",
        "ready_for_delivery_at",
        "out_for_delivery_at",
        "delivered_at",
        "delivery_failed_at",
        "estimated_finish_time",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]
