"""
数据访问层。

每个 Repository 只包一层 ORM 查询，不做权限判断、不拼响应。
Service 通过构造函数注入 Repository，测试时可以替换。

软删除的药品在这里过滤掉：
  Medicine.objects 只返回 deleted_at IS NULL 的行；
  订单明细通过 Prefetch(to_attr='active_medicine') 挂上药品，
  药品已软删除时 item.active_medicine 为 None。
"""

from django.db import transaction
from django.db.models import Prefetch

from .models import (
    Delivery,
    DeliveryInformation,
    Medicine,
    Order,
    OrderItem,
    OrderStatus,
)


def _items_with_active_medicine():
    return Prefetch(
        'items',
        queryset=OrderItem.objects.order_by('id').prefetch_related(
            Prefetch('medicine', queryset=Medicine.objects.all(), to_attr='active_medicine'),
        ),
    )


class BaseRepository:
    model = None

    def transaction(self):
        """块内的写操作一起提交或一起回滚，用法：with repo.transaction(): ..."""
        return transaction.atomic()

    def create(self, **fields):
        return self.model.objects.create(**fields)

    def save(self, instance, update_fields=None):
        instance.save(update_fields=update_fields)
        return instance

    def delete(self, instance):
        instance.delete()


# ── Order ──────────────────────────────────────────────────────────────────

class OrderRepository(BaseRepository):
    model = Order

    def _queryset(self):
        return Order.objects.prefetch_related(_items_with_active_medicine())

    def find_by_id(self, order_id):
        return self._queryset().filter(id=order_id).first()

    def find_by_ids(self, order_ids):
        return list(self._queryset().filter(id__in=list(order_ids)).order_by('-created_at', '-id'))

    def find_all(self):
        return list(self._queryset().order_by('-created_at', '-id'))

    def find_by_patient_id(self, patient_id):
        return list(self._queryset().filter(patient_id=patient_id).order_by('-created_at', '-id'))

    def find_latest_reviewed_by_patient_id(self, patient_id):
        """最近一笔非 pending 的订单；没有返回 None。"""
        return (
            self._queryset()
            .filter(patient_id=patient_id)
            .exclude(status=OrderStatus.PENDING)
            .order_by('-created_at', '-id')
            .first()
        )

    def find_by_doctor_id(self, doctor_id):
        """医生待审核（pending）的订单。"""
        return self.find_by_doctor_id_and_status(doctor_id, OrderStatus.PENDING)

    def find_by_doctor_id_and_status(self, doctor_id, status):
        return self.find_by_doctor_id_and_statuses(doctor_id, [status])

    def find_by_doctor_id_and_statuses(self, doctor_id, statuses):
        return list(
            self._queryset()
            .filter(doctor_id=doctor_id, status__in=list(statuses))
            .order_by('-created_at', '-id')
        )

    def find_by_status(self, status):
        return list(self._queryset().filter(status=status).order_by('-created_at', '-id'))


class OrderItemRepository(BaseRepository):
    model = OrderItem

    def find_by_order_id(self, order_id):
        return list(
            OrderItem.objects.filter(order_id=order_id)
            .prefetch_related(
                Prefetch('medicine', queryset=Medicine.objects.all(), to_attr='active_medicine'),
            )
            .order_by('id')
        )

    def delete_by_order_id(self, order_id):
        deleted, _ = OrderItem.objects.filter(order_id=order_id).delete()
        return deleted


# ── Medicine ───────────────────────────────────────────────────────────────

class MedicineRepository(BaseRepository):
    model = Medicine

    def find_all(self):
        return list(Medicine.objects.order_by('name', 'id'))

    def find_by_id(self, medicine_id):
        return Medicine.objects.filter(id=medicine_id).first()

    def find_by_ids(self, medicine_ids):
        return list(Medicine.objects.filter(id__in=list(medicine_ids)))


# ── Delivery ───────────────────────────────────────────────────────────────

class DeliveryRepository(BaseRepository):
    model = Delivery

    def find_by_id(self, delivery_id):
        return Delivery.objects.filter(id=delivery_id).first()

    def find_by_order_id(self, order_id):
        return Delivery.objects.filter(order_id=order_id).first()

    def find_by_order_ids(self, order_ids):
        """{order_id: Delivery}，列表接口批量补充配送状态用。"""
        return {
            delivery.order_id: delivery
            for delivery in Delivery.objects.filter(order_id__in=list(order_ids))
        }

    def find_by_status(self, status):
        return list(Delivery.objects.filter(status=status).order_by('-created_at', '-id'))


class DeliveryInformationRepository(BaseRepository):
    model = DeliveryInformation

    def find_by_id(self, info_id):
        return DeliveryInformation.objects.filter(id=info_id).first()

    def find_all(self):
        return list(DeliveryInformation.objects.order_by('-created_at', '-id'))

    def find_by_user_id(self, user_id):
        return list(
            DeliveryInformation.objects.filter(user_id=user_id).order_by('-version', '-created_at')
        )

    def find_by_user_id_and_method(self, user_id, delivery_method):
        return list(
            DeliveryInformation.objects.filter(user_id=user_id, delivery_method=delivery_method)
            .order_by('-version', '-created_at')
        )

    def find_latest_by_user_id_and_method(self, user_id, delivery_method):
        return (
            DeliveryInformation.objects.filter(user_id=user_id, delivery_method=delivery_method)
            .order_by('-version', '-created_at')
            .first()
        )
