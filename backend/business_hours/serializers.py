from rest_framework import serializers


class BusinessHoursStatusSerializer(serializers.Serializer):
    """Serializer for business hours status endpoint"""
    is_open = serializers.BooleanField()
    current_time = serializers.DateTimeField()
    utc_offset_hours = serializers.IntegerField()
    opening_time = serializers.TimeField(format="%H:%M")
    closing_time = serializers.TimeField(format="%H:%M")
    next_opening = serializers.DateTimeField(required=False, allow_null=True)
    next_closing = serializers.DateTimeField(required=False, allow_null=True)
    reason = serializers.CharField(required=False, allow_null=True)
