from django_filters import rest_framework as filters
from .models import Voucher


class VoucherFilter(filters.FilterSet):
    class Meta:
        model = Voucher
        fields = {
            "discount_type": ["exact"],
            "is_active": ["exact"],
            "start_date": ["gte", "lte"],
            "end_date": ["gte", "lte"],
        }
