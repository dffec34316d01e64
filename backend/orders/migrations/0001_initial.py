from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('vouchers', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('order_id', models.CharField(help_text='External order identifier, also used with the payment gateway.', max_length=64, unique=True)),
                ('phone', models.CharField(max_length=20)),
                ('address', models.TextField(blank=True)),
                ('delivery_option', models.CharField(choices=[('pickup_by_laundry', 'Pickup by Laundry'), ('self_service', 'Self Service')], max_length=20)),
                ('payment_method', models.CharField(choices=[('cod', 'Cash on Delivery'), ('credit_card', 'Credit Card'), ('mandiri_clickpay', 'Mandiri Clickpay'), ('cimb_clicks', 'CIMB Clicks'), ('bca_klikbca', 'BCA KlikBCA'), ('bca_klikpay', 'BCA KlikPay'), ('bri_epay', 'BRI ePay'), ('echannel', 'Mandiri Bill'), ('indosat_dompetku', 'Indosat Dompetku'), ('gopay', 'GoPay'), ('shopeepay', 'ShopeePay'), ('indomaret', 'Indomaret'), ('alfamart', 'Alfamart'), ('akulaku', 'Akulaku'), ('bank_transfer', 'Bank Transfer'), ('other', 'Other')], max_length=20)),
                ('subtotal', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('discount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('shipping_cost', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='subtotal - discount + shipping_cost, fixed at creation.', max_digits=12)),
                ('payment_status', models.CharField(choices=[('pending', 'Pending'), ('settlement', 'Settlement'), ('failed', 'Failed'), ('expired', 'Expired')], default='pending', max_length=20)),
                ('payment_status_updated_at', models.DateTimeField(blank=True, null=True)),
                ('order_status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('received', 'Received'), ('queue', 'Queue'), ('processing', 'Processing'), ('finished', 'Finished'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('received_at', models.DateTimeField(blank=True, null=True)),
                ('queue_at', models.DateTimeField(blank=True, null=True)),
                ('processing_at', models.DateTimeField(blank=True, null=True)),
                ('finished_at', models.DateTimeField(blank=True, null=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('delivery_status', models.CharField(choices=[('pending', 'Pending'), ('pickup_scheduled', 'Pickup Scheduled'), ('picked_up', 'Picked Up'), ('ready_for_delivery', 'Ready for Delivery'), ('out_for_delivery', 'Out for Delivery'), ('delivered', 'Delivered'), ('delivery_failed', 'Delivery Failed')], default='pending', max_length=20)),
                ('pickup_scheduled_at', models.DateTimeField(blank=True, null=True)),
                ('picked_up_at', models.DateTimeField(blank=True, null=True)),
                ('ready_for_delivery_at', models.DateTimeField(blank=True, null=True)),
                ('out_for_delivery_at', models.DateTimeField(blank=True, null=True)),
                ('delivered_at', models.DateTimeField(blank=True, null=True)),
                ('delivery_failed_at', models.DateTimeField(blank=True, null=True)),
                ('estimated_finish_time', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='orders', to=settings.AUTH_USER_MODEL)),
                ('voucher_applied', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders', to='vouchers.voucher')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['user', 'created_at'], name='order_user_created_idx'),
                    models.Index(fields=['order_status'], name='order_status_idx'),
                    models.Index(fields=['payment_status'], name='order_payment_status_idx'),
                    models.Index(fields=['delivery_status'], name='order_delivery_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('qty', models.PositiveIntegerField(default=1)),
                ('price_at_order', models.DecimalField(decimal_places=2, help_text='Service price at the time the order was placed.', max_digits=12)),
                ('before_service_images', models.JSONField(blank=True, default=list)),
                ('after_service_images', models.JSONField(blank=True, default=list)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.order')),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_items', to='catalog.service')),
            ],
            options={
                'verbose_name': 'Order Item',
                'verbose_name_plural': 'Order Items',
                'ordering': ['id'],
                'constraints': [models.UniqueConstraint(fields=('order', 'service'), name='unique_service_per_order')],
            },
        ),
    ]
