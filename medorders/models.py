import uuid
from decimal import Decimal

from django.db import models
from django.db.models import Q

from .ids import new_time_ordered_uuid


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'
    PAID = 'paid', 'Paid'
    PROCESSING = 'processing', 'Processing'
    SHIPPED = 'shipped', 'Shipped'
    DELIVERED = 'delivered', 'Delivered'
    CANCELLED = 'cancelled', 'Cancelled'


class DeliveryStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_TRANSIT = 'in_transit', 'In transit'
    DELIVERED = 'delivered', 'Delivered'
    FAILED = 'failed', 'Failed'


class DeliveryMethod(models.TextChoices):
    FLASH = 'flash', 'Flash'
    PICK_UP = 'pick_up', 'Pick up'


class MedicineLifecycle(models.TextChoices):
    ACTIVE = 'active', 'Active'
    DELETED = 'deleted', 'Deleted'


class ActiveMedicineManager(models.Manager):
    """默认 manager：软删除的药品对业务层不可见。"""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class Medicine(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.TextField()
    price = models.DecimalField(max_digits=12, decimal_places=2)
    stock = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    unit = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(blank=True, null=True, db_index=True)

    objects = ActiveMedicineManager()
    all_objects = models.Manager()

    class Meta:
        db_table = 'medicines'
        base_manager_name = 'all_objects'
        constraints = [
            models.CheckConstraint(condition=Q(price__gte=0), name='medicine_price_non_negative'),
            models.CheckConstraint(condition=Q(stock__gte=0), name='medicine_stock_non_negative'),
        ]

    @property
    def lifecycle(self):
        if self.deleted_at is None:
            return MedicineLifecycle.ACTIVE
        return MedicineLifecycle.DELETED

    def __str__(self):
        return f"{self.name} ({self.unit})"


class Order(models.Model):
    id = models.UUIDField(primary_key=True, default=new_time_ordered_uuid, editable=False)
    patient_id = models.UUIDField(db_index=True)
    doctor_id = models.UUIDField(blank=True, null=True, db_index=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    note = models.TextField(blank=True, null=True)
    submitted_at = models.DateTimeField(blank=True, null=True)
    reviewed_at = models.DateTimeField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        constraints = [
            models.CheckConstraint(condition=Q(total_amount__gte=0), name='order_total_amount_non_negative'),
        ]

    def __str__(self):
        return f"Order {self.id} [{self.status}]"


class OrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=new_time_ordered_uuid, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    medicine = models.ForeignKey(Medicine, on_delete=models.PROTECT, related_name='+')
    quantity = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = 'order_items'
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gt=0), name='order_item_quantity_positive'),
        ]


class Delivery(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_id = models.UUIDField(unique=True)
    delivery_information_id = models.UUIDField()
    tracking_number = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=DeliveryStatus.choices, default=DeliveryStatus.PENDING)
    delivered_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'deliveries'


class DeliveryInformation(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.UUIDField(db_index=True)
    address = models.TextField()
    phone_number = models.TextField()
    version = models.PositiveIntegerField(default=1)
    delivery_method = models.CharField(max_length=20, choices=DeliveryMethod.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'delivery_informations'
        constraints = [
            models.CheckConstraint(condition=Q(version__gt=0), name='delivery_information_version_positive'),
        ]
