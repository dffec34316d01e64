"""
Payment Gateway Callback Tests

Signature verification, status mapping and idempotent application of
gateway notifications to the order's payment track.
"""
import pytest

from django.test import override_settings
from rest_framework import status

from core_backend.exceptions import AuthorizationError, ValidationError
from notifications.models import Notification
from orders.models import Order
from payments.services import PaymentGatewayService

SERVER_KEY = 'test-server-key'
URL = '/api/payments/notification/'


def signed_payload(order_id, transaction_status, server_key=SERVER_KEY, **extra):
    payload = {
        'order_id': order_id,
        'transaction_status': transaction_status,
        'status_code': '200',
        'gross_amount': '53000.00',
    }
    payload['signature_key'] = PaymentGatewayService.compute_signature(
        order_id, payload['status_code'], payload['gross_amount'], server_key
    )
    payload.update(extra)
    return payload


class TestSignature:
    def test_valid_signature(self):
        assert PaymentGatewayService.verify_signature(
            signed_payload('LND-1', 'settlement'), server_key=SERVER_KEY
        )

    def test_tampered_amount(self):
        payload = signed_payload('LND-1', 'settlement', gross_amount='1.00')
        assert not PaymentGatewayService.verify_signature(payload, server_key=SERVER_KEY)

    def test_missing_signature(self):
        payload = signed_payload('LND-1', 'settlement', signature_key='')
        assert not PaymentGatewayService.verify_signature(payload, server_key=SERVER_KEY)

    @override_settings(PAYMENT_GATEWAY_SERVER_KEY='', DEBUG=True)
    def test_unconfigured_key_skips_verification_in_debug(self):
        assert PaymentGatewayService.verify_signature({'order_id': 'LND-1'})

    @override_settings(PAYMENT_GATEWAY_SERVER_KEY='', DEBUG=False)
    def test_unconfigured_key_rejects_outside_debug(self):
        assert not PaymentGatewayService.verify_signature({'order_id': 'LND-1'})


class TestStatusMapping:
    @pytest.mark.parametrize('gateway_status, expected', [
        ('settlement', 'settlement'),
        ('capture', 'settlement'),
        ('pending', 'pending'),
        ('expire', 'expired'),
        ('cancel', 'failed'),
        ('deny', 'failed'),
        ('failure', 'failed'),
    ])
    def test_mapping(self, gateway_status, expected):
        assert PaymentGatewayService.map_status(gateway_status) == expected

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            PaymentGatewayService.map_status('refund')


@pytest.mark.django_db
class TestHandleNotification:
    @pytest.fixture(autouse=True)
    def server_key(self, settings):
        settings.PAYMENT_GATEWAY_SERVER_KEY = SERVER_KEY

    def test_settlement_confirms_order(self, gateway_order):
        order = PaymentGatewayService.handle_notification(
            signed_payload(gateway_order.order_id, 'settlement')
        )

        assert order.payment_status == Order.PaymentStatus.SETTLEMENT
        assert order.order_status == Order.OrderStatus.CONFIRMED

    def test_bad_signature_changes_nothing(self, gateway_order):
        with pytest.raises(AuthorizationError):
            PaymentGatewayService.handle_notification(
                signed_payload(gateway_order.order_id, 'settlement', server_key='wrong')
            )

        gateway_order.refresh_from_db()
        assert gateway_order.payment_status == Order.PaymentStatus.PENDING

    def test_repeated_callback_notifies_once(self, gateway_order):
        payload = signed_payload(gateway_order.order_id, 'settlement')
        PaymentGatewayService.handle_notification(payload)
        PaymentGatewayService.handle_notification(payload)

        assert Notification.objects.filter(
            type=Notification.Type.PAYMENT_STATUS_UPDATE
        ).count() == 1


@pytest.mark.django_db
class TestNotificationEndpoint:
    @pytest.fixture(autouse=True)
    def server_key(self, settings):
        settings.PAYMENT_GATEWAY_SERVER_KEY = SERVER_KEY

    def test_callback_is_unauthenticated(self, api_client, gateway_order):
        response = api_client.post(
            URL, signed_payload(gateway_order.order_id, 'expire'), format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            'order_id': gateway_order.order_id,
            'payment_status': 'expired',
        }

    def test_invalid_signature_is_403(self, api_client, gateway_order):
        response = api_client.post(
            URL,
            signed_payload(gateway_order.order_id, 'settlement', server_key='wrong'),
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['error'] == 'Invalid signature'

    def test_unknown_order_is_404(self, api_client, db):
        response = api_client.post(URL, signed_payload('LND-MISSING', 'settlement'), format='json')
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unsigned_callback_rejected_without_key(self, api_client, gateway_order, settings):
        settings.PAYMENT_GATEWAY_SERVER_KEY = ''
        settings.DEBUG = False

        response = api_client.post(
            URL,
            {'order_id': gateway_order.order_id, 'transaction_status': 'settlement'},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        gateway_order.refresh_from_db()
        assert gateway_order.payment_status == Order.PaymentStatus.PENDING
        assert gateway_order.order_status == Order.OrderStatus.PENDING

    def test_final_status_cannot_be_reopened(self, api_client, gateway_order):
        api_client.post(URL, signed_payload(gateway_order.order_id, 'expire'), format='json')

        response = api_client.post(
            URL, signed_payload(gateway_order.order_id, 'settlement'), format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['code'] == 'invalid_status_transition'
