"""
Notifications Tests

Fan-out writes, per-recipient read/delete state and the notifications API.
"""

import pytest

from rest_framework import status

from core_backend.exceptions import NotificationNotFound
from notifications.models import Notification, NotificationRecipient
from notifications.services import NotificationService


@pytest.mark.django_db
class TestNotificationService:
    def test_one_notification_many_recipients(self, admin_user, second_admin):
        notification = NotificationService.notify(
            Notification.Type.NEW_ORDER, 'New order received: X', [admin_user, second_admin]
        )

        assert Notification.objects.count() == 1
        assert notification.recipients.count() == 2

    def test_duplicate_recipients_collapsed(self, admin_user):
        notification = NotificationService.notify(
            Notification.Type.NEW_ORDER, 'hello', [admin_user, admin_user]
        )
        assert notification.recipients.count() == 1

    def test_no_recipients_writes_nothing(self, db):
        assert NotificationService.notify(Notification.Type.NEW_ORDER, 'nobody', []) is None
        assert Notification.objects.count() == 0

    def test_notify_user_records_role(self, customer):
        notification = NotificationService.notify_user(
            customer, Notification.Type.ORDER_STATUS, 'update'
        )
        assert notification.for_role == 'user'

    def test_read_state_is_per_recipient(self, admin_user, second_admin):
        notification = NotificationService.notify(
            Notification.Type.NEW_ORDER, 'hello', [admin_user, second_admin]
        )

        NotificationService.mark_read(notification.pk, admin_user)

        assert NotificationService.unread_count(admin_user) == 0
        assert NotificationService.unread_count(second_admin) == 1

    def test_soft_delete_hides_only_for_that_user(self, admin_user, second_admin):
        notification = NotificationService.notify(
            Notification.Type.NEW_ORDER, 'hello', [admin_user, second_admin]
        )

        NotificationService.soft_delete(notification.pk, admin_user)

        assert not NotificationService.list_for_user(admin_user).exists()
        assert NotificationService.list_for_user(second_admin).count() == 1
        assert NotificationRecipient.objects.filter(is_deleted=True).count() == 1

    def test_deleted_notification_cannot_be_marked_read(self, admin_user):
        notification = NotificationService.notify_user(
            admin_user, Notification.Type.NEW_ORDER, 'hello'
        )
        NotificationService.soft_delete(notification.pk, admin_user)

        with pytest.raises(NotificationNotFound):
            NotificationService.mark_read(notification.pk, admin_user)
        assert not NotificationRecipient.objects.get(notification=notification).is_read

    def test_mark_read_for_non_recipient(self, admin_user, customer):
        notification = NotificationService.notify_user(
            admin_user, Notification.Type.NEW_ORDER, 'hello'
        )
        with pytest.raises(NotificationNotFound):
            NotificationService.mark_read(notification.pk, customer)


@pytest.mark.django_db
class TestNotificationAPI:
    def test_list_own_notifications(self, admin_client, cod_order):
        response = admin_client.get('/api/notifications/')

        assert response.status_code == status.HTTP_200_OK
        rows = response.json()['results']
        assert len(rows) == 1
        assert rows[0]['message'] == f'New order received: {cod_order.order_id}'
        assert rows[0]['related_order'] == cod_order.order_id
        assert rows[0]['is_read'] is False

    def test_customer_does_not_see_admin_notifications(self, customer_client, cod_order):
        response = customer_client.get('/api/notifications/')
        assert response.json()['results'] == []

    def test_mark_read_and_unread_count(self, admin_client, cod_order):
        notification_id = Notification.objects.get().pk

        assert admin_client.get('/api/notifications/unread-count/').json() == {'unread': 1}

        response = admin_client.patch(f'/api/notifications/{notification_id}/read/')
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['is_read'] is True

        assert admin_client.get('/api/notifications/unread-count/').json() == {'unread': 0}

    def test_delete(self, admin_client, cod_order):
        notification_id = Notification.objects.get().pk

        response = admin_client.delete(f'/api/notifications/{notification_id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'message': 'Notification deleted successfully'}
        assert admin_client.get('/api/notifications/').json()['results'] == []

    def test_delete_unknown_is_404(self, admin_client):
        response = admin_client.delete('/api/notifications/999999/')
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_requires_authentication(self, api_client):
        assert api_client.get('/api/notifications/').status_code == status.HTTP_401_UNAUTHORIZED
