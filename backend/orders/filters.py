import django_filters
from .models import Order


class OrderFilter(django_filters.FilterSet):
    """
    Filter orders by any of the three status tracks and by creation date.
    """

    created_at__gte = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='gte')
    created_at__lte = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='lte')

    class Meta:
        model = Order
        fields = [
            'order_status',
            'payment_status',
            'delivery_status',
            'payment_method',
            'delivery_option',
        ]
