from rest_framework import serializers


class GatewayNotificationSerializer(serializers.Serializer):
    """
    Status notification posted by the payment gateway. Values are kept as
    the strings the gateway sent, since the signature is computed over them.
    """

    order_id = serializers.CharField()
    transaction_status = serializers.CharField()
    status_code = serializers.CharField(required=False, allow_blank=True, default="")
    gross_amount = serializers.CharField(required=False, allow_blank=True, default="")
    signature_key = serializers.CharField(required=False, allow_blank=True, default="")
    fraud_status = serializers.CharField(required=False, allow_blank=True)
