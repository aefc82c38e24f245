import decimal
import uuid

import django.db.models.deletion
from django.db import migrations, models

import medorders.ids


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Delivery',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order_id', models.UUIDField(unique=True)),
                ('delivery_information_id', models.UUIDField()),
                ('tracking_number', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('in_transit', 'In transit'), ('delivered', 'Delivered'), ('failed', 'Failed')], default='pending', max_length=20)),
                ('delivered_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'deliveries',
            },
        ),
        migrations.CreateModel(
            name='DeliveryInformation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('user_id', models.UUIDField(db_index=True)),
                ('address', models.TextField()),
                ('phone_number', models.TextField()),
                ('version', models.PositiveIntegerField(default=1)),
                ('delivery_method', models.CharField(choices=[('flash', 'Flash'), ('pick_up', 'Pick up')], max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'delivery_informations',
                'constraints': [models.CheckConstraint(condition=models.Q(('version__gt', 0)), name='delivery_information_version_positive')],
            },
        ),
        migrations.CreateModel(
            name='Medicine',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.TextField()),
                ('price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('stock', models.DecimalField(decimal_places=2, default=decimal.Decimal('0'), max_digits=12)),
                ('unit', models.TextField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
            ],
            options={
                'db_table': 'medicines',
                'base_manager_name': 'all_objects',
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('price__gte', 0)), name='medicine_price_non_negative'),
                    models.CheckConstraint(condition=models.Q(('stock__gte', 0)), name='medicine_stock_non_negative'),
                ],
            },
            managers=[
                ('objects', models.Manager()),
                ('all_objects', models.Manager()),
            ],
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=medorders.ids.new_time_ordered_uuid, editable=False, primary_key=True, serialize=False)),
                ('patient_id', models.UUIDField(db_index=True)),
                ('doctor_id', models.UUIDField(blank=True, db_index=True, null=True)),
                ('total_amount', models.DecimalField(decimal_places=2, default=decimal.Decimal('0'), max_digits=12)),
                ('note', models.TextField(blank=True, null=True)),
                ('submitted_at', models.DateTimeField(blank=True, null=True)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected'), ('paid', 'Paid'), ('processing', 'Processing'), ('shipped', 'Shipped'), ('delivered', 'Delivered'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'orders',
                'constraints': [models.CheckConstraint(condition=models.Q(('total_amount__gte', 0)), name='order_total_amount_non_negative')],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.UUIDField(default=medorders.ids.new_time_ordered_uuid, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.DecimalField(decimal_places=2, max_digits=12)),
                ('medicine', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='medorders.medicine')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='medorders.order')),
            ],
            options={
                'db_table': 'order_items',
                'constraints': [models.CheckConstraint(condition=models.Q(('quantity__gt', 0)), name='order_item_quantity_positive')],
            },
        ),
    ]
