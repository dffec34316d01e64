"""
Order Status Track Tests

Covers the fulfilment, delivery and payment tracks: accepted and rejected
transitions, timestamps, owner notifications and the settlement
side-effect on the fulfilment track. Also covers image attachment and
order deletion.
"""
import pytest
from datetime import timedelta

from core_backend.exceptions import (
    BusinessRuleViolation,
    InvalidStatusTransition,
    ServiceNotInOrder,
    ValidationError,
)
from notifications.models import Notification
from orders.models import Order
from orders.services import OrderService, OrderStatusService


def owner_notifications(order, type):
    return Notification.objects.filter(type=type, recipients__user=order.user)


@pytest.mark.django_db
class TestOrderStatusTrack:
    def test_happy_path_sets_each_timestamp(self, cod_order, open_time):
        steps = [
            (Order.OrderStatus.CONFIRMED, 'confirmed_at'),
            (Order.OrderStatus.RECEIVED, 'received_at'),
            (Order.OrderStatus.QUEUE, 'queue_at'),
            (Order.OrderStatus.PROCESSING, 'processing_at'),
            (Order.OrderStatus.FINISHED, 'finished_at'),
        ]
        order = cod_order
        for minutes, (status, field) in enumerate(steps, start=1):
            at = open_time + timedelta(minutes=minutes)
            order = OrderStatusService.update_order_status(order, status, now=at)
            assert order.order_status == status
            assert getattr(order, field) == at

        assert owner_notifications(cod_order, Notification.Type.ORDER_STATUS).count() == 5

    def test_notification_message(self, cod_order):
        OrderStatusService.update_order_status(cod_order, Order.OrderStatus.CONFIRMED)

        notification = owner_notifications(cod_order, Notification.Type.ORDER_STATUS).get()
        assert notification.message == (
            f'Your order {cod_order.order_id} status has been updated to confirmed'
        )
        assert notification.related_order == cod_order

    def test_skipping_a_step_is_rejected(self, cod_order):
        with pytest.raises(InvalidStatusTransition) as exc_info:
            OrderStatusService.update_order_status(cod_order, Order.OrderStatus.PROCESSING)

        assert exc_info.value.current == Order.OrderStatus.PENDING
        assert exc_info.value.requested == Order.OrderStatus.PROCESSING
        cod_order.refresh_from_db()
        assert cod_order.order_status == Order.OrderStatus.PENDING
        assert cod_order.processing_at is None
        assert not owner_notifications(cod_order, Notification.Type.ORDER_STATUS).exists()

    def test_same_status_is_rejected(self, cod_order):
        with pytest.raises(InvalidStatusTransition):
            OrderStatusService.update_order_status(cod_order, Order.OrderStatus.PENDING)

    def test_cancel_from_processing(self, cod_order):
        order = cod_order
        for status in ('confirmed', 'received', 'queue', 'processing', 'cancelled'):
            order = OrderStatusService.update_order_status(order, status)
        assert order.order_status == Order.OrderStatus.CANCELLED
        assert order.cancelled_at is not None

    def test_terminal_states_are_final(self, cod_order):
        order = OrderStatusService.update_order_status(cod_order, Order.OrderStatus.CANCELLED)
        with pytest.raises(InvalidStatusTransition):
            OrderStatusService.update_order_status(order, Order.OrderStatus.CONFIRMED)

    def test_unknown_status_rejected(self, cod_order):
        with pytest.raises(ValidationError):
            OrderStatusService.update_order_status(cod_order, 'shipped')


@pytest.mark.django_db
class TestDeliveryStatusTrack:
    def test_chain_to_delivered(self, cod_order):
        order = cod_order
        for status in (
            'pickup_scheduled',
            'picked_up',
            'ready_for_delivery',
            'out_for_delivery',
            'delivered',
        ):
            order = OrderStatusService.update_delivery_status(order, status)

        assert order.delivery_status == Order.DeliveryStatus.DELIVERED
        assert order.pickup_scheduled_at <= order.delivered_at
        assert owner_notifications(cod_order, Notification.Type.DELIVERY_STATUS).count() == 5

    def test_notification_message(self, cod_order):
        OrderStatusService.update_delivery_status(cod_order, 'pickup_scheduled')
        notification = owner_notifications(cod_order, Notification.Type.DELIVERY_STATUS).get()
        assert notification.message == (
            f'Delivery status for your order {cod_order.order_id} '
            f'has been updated to pickup_scheduled'
        )

    def test_failure_after_pickup_scheduled(self, cod_order):
        order = OrderStatusService.update_delivery_status(cod_order, 'pickup_scheduled')
        order = OrderStatusService.update_delivery_status(order, 'delivery_failed')
        assert order.delivery_failed_at is not None

    def test_failure_straight_from_pending_rejected(self, cod_order):
        with pytest.raises(InvalidStatusTransition):
            OrderStatusService.update_delivery_status(cod_order, 'delivery_failed')

    def test_tracks_are_independent(self, cod_order):
        order = OrderStatusService.update_delivery_status(cod_order, 'pickup_scheduled')
        assert order.order_status == Order.OrderStatus.PENDING
        assert order.payment_status == Order.PaymentStatus.PENDING


@pytest.mark.django_db
class TestCodPaymentTrack:
    def test_settlement_confirms_pending_order(self, cod_order, open_time):
        order = OrderStatusService.update_cod_payment_status(
            cod_order, 'settlement', now=open_time
        )

        assert order.payment_status == Order.PaymentStatus.SETTLEMENT
        assert order.payment_status_updated_at == open_time
        assert order.order_status == Order.OrderStatus.CONFIRMED
        assert order.confirmed_at == open_time

        notification = owner_notifications(
            cod_order, Notification.Type.PAYMENT_STATUS_UPDATE
        ).get()
        assert notification.message == (
            f'Payment status for your COD order {cod_order.order_id} '
            f'has been updated to settlement'
        )

    def test_settlement_leaves_later_order_status_alone(self, cod_order):
        order = OrderStatusService.update_order_status(cod_order, 'confirmed')
        order = OrderStatusService.update_order_status(order, 'received')

        order = OrderStatusService.update_cod_payment_status(order, 'settlement')
        assert order.order_status == Order.OrderStatus.RECEIVED

    def test_settlement_can_be_reverted(self, cod_order):
        order = OrderStatusService.update_cod_payment_status(cod_order, 'settlement')
        order = OrderStatusService.update_cod_payment_status(order, 'pending')

        assert order.payment_status == Order.PaymentStatus.PENDING
        # Reverting payment does not roll back fulfilment
        assert order.order_status == Order.OrderStatus.CONFIRMED

    def test_same_status_rejected(self, cod_order):
        with pytest.raises(InvalidStatusTransition):
            OrderStatusService.update_cod_payment_status(cod_order, 'pending')

    def test_gateway_only_status_rejected(self, cod_order):
        with pytest.raises(ValidationError) as exc_info:
            OrderStatusService.update_cod_payment_status(cod_order, 'expired')
        assert exc_info.value.message == 'Invalid payment status'

    def test_non_cod_order_rejected(self, gateway_order):
        with pytest.raises(BusinessRuleViolation) as exc_info:
            OrderStatusService.update_cod_payment_status(gateway_order, 'settlement')

        assert exc_info.value.message == 'Payment status can only be updated for COD orders'
        gateway_order.refresh_from_db()
        assert gateway_order.payment_status == Order.PaymentStatus.PENDING


@pytest.mark.django_db
class TestGatewayPaymentTrack:
    def test_settlement_confirms_order(self, gateway_order):
        order = OrderStatusService.apply_gateway_payment_status(gateway_order, 'settlement')

        assert order.payment_status == Order.PaymentStatus.SETTLEMENT
        assert order.order_status == Order.OrderStatus.CONFIRMED
        notification = owner_notifications(
            gateway_order, Notification.Type.PAYMENT_STATUS_UPDATE
        ).get()
        assert notification.message == (
            f'Payment status for your order {gateway_order.order_id} '
            f'has been updated to settlement'
        )

    def test_repeated_status_is_a_no_op(self, gateway_order):
        order = OrderStatusService.apply_gateway_payment_status(gateway_order, 'settlement')
        stamped_at = order.payment_status_updated_at

        order = OrderStatusService.apply_gateway_payment_status(order, 'settlement')

        assert order.payment_status_updated_at == stamped_at
        assert owner_notifications(
            gateway_order, Notification.Type.PAYMENT_STATUS_UPDATE
        ).count() == 1

    def test_expired_is_final(self, gateway_order):
        order = OrderStatusService.apply_gateway_payment_status(gateway_order, 'expired')
        assert order.order_status == Order.OrderStatus.PENDING

        with pytest.raises(InvalidStatusTransition):
            OrderStatusService.apply_gateway_payment_status(order, 'settlement')


@pytest.mark.django_db
class TestOrderImages:
    def test_attach_before_images(self, cod_order, wash_service):
        item = OrderService.attach_images(
            cod_order,
            wash_service.pk,
            ['https://img.test/1.jpg', {'link': 'https://img.test/2.jpg'}],
            'before',
        )

        item.refresh_from_db()
        assert item.before_service_images == [
            {'link': 'https://img.test/1.jpg'},
            {'link': 'https://img.test/2.jpg'},
        ]
        assert item.after_service_images == []

    def test_attach_replaces_previous_images(self, cod_order, wash_service):
        OrderService.attach_images(cod_order, wash_service.pk, ['a.jpg'], 'after')
        item = OrderService.attach_images(cod_order, wash_service.pk, ['b.jpg'], 'after')
        assert item.after_service_images == [{'link': 'b.jpg'}]

    def test_service_not_in_order(self, cod_order, iron_service):
        with pytest.raises(ServiceNotInOrder):
            OrderService.attach_images(cod_order, iron_service.pk, ['a.jpg'], 'before')

    def test_malformed_image_rejected(self, cod_order, wash_service):
        with pytest.raises(ValidationError):
            OrderService.attach_images(cod_order, wash_service.pk, [{'url': 'x'}], 'before')


@pytest.mark.django_db
class TestOrderDeletion:
    def test_delete_notifies_owner(self, cod_order, customer):
        order_id = cod_order.order_id
        OrderService.delete_order(cod_order)

        assert not Order.objects.filter(order_id=order_id).exists()
        notification = Notification.objects.get(type=Notification.Type.ORDER_DELETED)
        assert notification.message == f'Your order {order_id} has been deleted by the admin'
        assert list(notification.recipients.values_list('user_id', flat=True)) == [customer.pk]

    def test_delete_keeps_voucher_usage(self, order_factory, voucher):
        order = order_factory(voucher_code='SAVE10')
        OrderService.delete_order(order)

        voucher.refresh_from_db()
        assert voucher.usage_count == 1
