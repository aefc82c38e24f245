"""
OrderService: 订单生命周期。

状态机：
  pending  → approved / rejected / cancelled / paid
  approved → paid
  rejected、cancelled 为终态
  paid → processing → shipped → delivered 没有对应的操作，只能直接改数据

每个方法的第一个参数都是 Principal（调用者 subject_id + role），
由 view 显式传入，service 不读任何请求级全局状态。
"""

import logging
import uuid
from decimal import Decimal

from django.db import DatabaseError
from django.utils import timezone

from ..authentication import ROLE_DOCTOR, ROLE_PATIENT
from ..clients import ClientError, get_appointment_client, get_user_client
from ..exceptions import BadRequestError, ConflictError, ForbiddenError, InternalError, NotFoundError
from ..models import OrderStatus
from ..repositories import DeliveryRepository, MedicineRepository, OrderItemRepository, OrderRepository
from ..serializers import (
    serialize_doctor_order_row,
    serialize_order_detail,
    serialize_order_list,
)
from .enrichment import Enrichment, attempt

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')

# 已付款或已进入履约流程：再次付款是冲突
ALREADY_PAID_STATUSES = (
    OrderStatus.PAID,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
)
# 终态：不允许付款
UNPAYABLE_STATUSES = (OrderStatus.CANCELLED, OrderStatus.REJECTED)
PAYABLE_STATUSES = (OrderStatus.PENDING, OrderStatus.APPROVED)

# 医生历史列表的默认过滤
DOCTOR_HISTORY_STATUSES = [OrderStatus.APPROVED, OrderStatus.REJECTED]


def parse_uuid(value, message, code):
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError) as exc:
        raise BadRequestError(message, code=code) from exc


def calculate_total(items):
    """Σ price × quantity；药品已软删除的明细不计入。"""
    total = Decimal('0')
    for item in items:
        medicine = getattr(item, 'active_medicine', None)
        if medicine is None:
            continue
        total += medicine.price * item.quantity
    return total.quantize(CENT)


class OrderService:

    def __init__(
        self,
        orders=None,
        order_items=None,
        medicines=None,
        deliveries=None,
        appointment_client=None,
        user_client=None,
    ):
        self.orders = orders or OrderRepository()
        self.order_items = order_items or OrderItemRepository()
        self.medicines = medicines or MedicineRepository()
        self.deliveries = deliveries or DeliveryRepository()
        self.appointment_client = appointment_client or get_appointment_client()
        self.user_client = user_client or get_user_client()

    # ── 共用检查 ──────────────────────────────────────────────────────────

    @staticmethod
    def _require_role(principal, role, action):
        if principal.role != role:
            raise ForbiddenError(f'only {role}s can {action} orders', code='ROLE_NOT_ALLOWED')

    def _get_order(self, order_id):
        order_uuid = parse_uuid(order_id, 'invalid order ID', 'INVALID_ORDER_ID')
        order = self.orders.find_by_id(order_uuid)
        if order is None:
            raise NotFoundError('order not found', code='ORDER_NOT_FOUND')
        return order

    @staticmethod
    def _require_owning_doctor(principal, order, action):
        doctor_id = principal.subject_uuid()
        if order.doctor_id is None or order.doctor_id != doctor_id:
            raise ForbiddenError(
                f'doctor can only {action} their own orders',
                code='NOT_ORDER_DOCTOR',
            )

    def _current_total(self, order):
        return calculate_total(self.order_items.find_by_order_id(order.id))

    # ── 补充查询 ──────────────────────────────────────────────────────────

    def _delivery_of(self, order) -> Enrichment:
        return attempt(
            lambda: self.deliveries.find_by_order_id(order.id),
            f'delivery for order {order.id}',
            exceptions=(DatabaseError,),
        )

    def _deliveries_of(self, orders) -> Enrichment:
        return attempt(
            lambda: self.deliveries.find_by_order_ids([order.id for order in orders]),
            'deliveries for order list',
            exceptions=(DatabaseError,),
        )

    def _patient_profiles_of(self, orders, token) -> Enrichment:
        """每个患者只查一次，按首次出现的顺序。"""
        patient_ids = list(dict.fromkeys(str(order.patient_id) for order in orders))
        if not patient_ids:
            return Enrichment.found({})
        return attempt(
            lambda: {profile.id: profile for profile in self.user_client.get_patients_by_ids(patient_ids, token=token)},
            'patient profiles',
            exceptions=(ClientError,),
        )

    def _detail(self, order):
        return serialize_order_detail(order, self._delivery_of(order).value_or_none())

    def _list(self, orders):
        deliveries = self._deliveries_of(orders).value_or_none() or {}
        return serialize_order_list([
            serialize_order_detail(order, deliveries.get(order.id)) for order in orders
        ])

    def _doctor_list(self, principal, orders):
        deliveries = self._deliveries_of(orders).value_or_none() or {}
        profiles = self._patient_profiles_of(orders, principal.token).value_or_none() or {}
        return serialize_order_list([
            serialize_doctor_order_row(
                order,
                deliveries.get(order.id),
                profiles.get(str(order.patient_id)),
            )
            for order in orders
        ])

    # ── 患者 ──────────────────────────────────────────────────────────────

    def create_order(self, principal, note=None):
        if principal.role != ROLE_PATIENT:
            raise ForbiddenError('only patients can create orders', code='ROLE_NOT_ALLOWED')
        patient_id = principal.subject_uuid()

        try:
            appointment = self.appointment_client.get_latest_appointment_by_patient_id(
                str(patient_id), token=principal.token,
            )
        except ClientError as exc:
            raise InternalError(
                'failed to get latest appointment', code='APPOINTMENT_LOOKUP_FAILED',
            ) from exc

        if appointment is None:
            raise BadRequestError('patient has no appointment history', code='NO_APPOINTMENT')

        try:
            doctor_id = uuid.UUID(appointment.doctor_id)
        except ValueError as exc:
            raise InternalError(
                'appointment has an invalid doctor ID', code='APPOINTMENT_LOOKUP_FAILED',
            ) from exc

        order = self.orders.create(
            patient_id=patient_id,
            doctor_id=doctor_id,
            note=note,
            status=OrderStatus.PENDING,
            submitted_at=timezone.now(),
            total_amount=Decimal('0'),
        )
        logger.info('Order %s created by patient %s for doctor %s', order.id, patient_id, doctor_id)
        return {'order_id': str(order.id)}

    def get_order_by_id(self, principal, order_id):
        return self._detail(self._get_order(order_id))

    def get_all_orders_history_by_patient_id(self, principal):
        patient_id = principal.subject_uuid()
        return self._list(self.orders.find_by_patient_id(patient_id))

    def get_latest_order_by_patient_id(self, principal):
        patient_id = principal.subject_uuid()
        order = self.orders.find_latest_reviewed_by_patient_id(patient_id)
        if order is None:
            raise NotFoundError('no reviewed order found', code='ORDER_NOT_FOUND')
        return self._detail(order)

    def pay_order(self, principal, order_id):
        self._require_role(principal, ROLE_PATIENT, 'pay')
        if not order_id:
            raise BadRequestError('order ID is required', code='ORDER_ID_REQUIRED')

        order = self._get_order(order_id)
        if order.patient_id != principal.subject_uuid():
            raise ForbiddenError('patient can only pay their own orders', code='NOT_ORDER_PATIENT')

        if order.status in ALREADY_PAID_STATUSES:
            raise ConflictError('order already paid or processed', code='ORDER_ALREADY_PAID')
        if order.status in UNPAYABLE_STATUSES:
            raise ForbiddenError('order cannot be paid in current state', code='ORDER_NOT_PAYABLE')
        if order.status not in PAYABLE_STATUSES:
            raise BadRequestError('unknown order state', code='UNKNOWN_ORDER_STATE')

        order.total_amount = self._current_total(order)
        order.status = OrderStatus.PAID
        self.orders.save(order, update_fields=['total_amount', 'status', 'updated_at'])
        logger.info('Order %s paid, total=%s', order.id, order.total_amount)
        return {'order_id': str(order.id), 'status': order.status}

    # ── 医生 ──────────────────────────────────────────────────────────────

    def update_order(self, principal, order_id, items):
        """
        整体替换订单明细并重算总价，状态不变。

        删除旧明细 → 插入新明细 → 更新总价 在同一个事务里：
        任意一个药品不存在时整体回滚，旧明细和旧总价保持不变。
        """
        if principal.role != ROLE_DOCTOR:
            raise ForbiddenError('only doctors can update orders', code='ROLE_NOT_ALLOWED')

        order = self._get_order(order_id)
        self._require_owning_doctor(principal, order, 'edit')

        with self.orders.transaction():
            self.order_items.delete_by_order_id(order.id)

            total = Decimal('0')
            for item in items:
                medicine_id = parse_uuid(item.medicine_id, 'invalid medicine ID', 'INVALID_MEDICINE_ID')
                medicine = self.medicines.find_by_id(medicine_id)
                if medicine is None:
                    raise BadRequestError(
                        'medicine not found',
                        code='MEDICINE_NOT_FOUND',
                        detail={'medicine_id': item.medicine_id},
                    )
                self.order_items.create(order=order, medicine=medicine, quantity=item.quantity)
                total += medicine.price * item.quantity

            order.total_amount = total.quantize(CENT)
            self.orders.save(order, update_fields=['total_amount', 'updated_at'])

        logger.info('Order %s items replaced (%d items), total=%s', order.id, len(items), order.total_amount)
        return {'order_id': str(order.id)}

    def get_latest_order_by_patient_id_for_doctor(self, principal, patient_id):
        self._require_role(principal, ROLE_DOCTOR, 'view patient')
        patient_uuid = parse_uuid(patient_id, 'invalid patient ID', 'INVALID_PATIENT_ID')

        order = self.orders.find_latest_reviewed_by_patient_id(patient_uuid)
        if order is None:
            raise NotFoundError('no reviewed order found', code='ORDER_NOT_FOUND')

        self._require_owning_doctor(principal, order, 'view')
        return self._detail(order)

    def _review(self, principal, order_id, action, status, recompute=True):
        self._require_role(principal, ROLE_DOCTOR, action)
        order = self._get_order(order_id)
        self._require_owning_doctor(principal, order, action)

        update_fields = ['status', 'updated_at']
        if recompute:
            order.total_amount = self._current_total(order)
            order.reviewed_at = timezone.now()
            update_fields += ['total_amount', 'reviewed_at']
        order.status = status
        self.orders.save(order, update_fields=update_fields)

        logger.info('Order %s %s by doctor %s', order.id, status, principal.subject_id)
        return {'order_id': str(order.id), 'status': order.status}

    def cancel_order(self, principal, order_id):
        return self._review(principal, order_id, 'cancel', OrderStatus.CANCELLED, recompute=False)

    def approve_order(self, principal, order_id):
        return self._review(principal, order_id, 'approve', OrderStatus.APPROVED)

    def reject_order(self, principal, order_id):
        return self._review(principal, order_id, 'reject', OrderStatus.REJECTED)

    def get_all_orders_by_doctor_id(self, principal):
        self._require_role(principal, ROLE_DOCTOR, 'list')
        doctor_id = principal.subject_uuid()
        return self._doctor_list(principal, self.orders.find_by_doctor_id(doctor_id))

    def get_all_orders_history_for_doctor(self, principal, status_filter=None):
        self._require_role(principal, ROLE_DOCTOR, 'list')
        doctor_id = principal.subject_uuid()

        if status_filter:
            if status_filter not in OrderStatus.values:
                raise BadRequestError(
                    'invalid status filter',
                    code='INVALID_STATUS',
                    detail={'allowed': list(OrderStatus.values)},
                )
            orders = self.orders.find_by_doctor_id_and_status(doctor_id, status_filter)
        else:
            orders = self.orders.find_by_doctor_id_and_statuses(doctor_id, DOCTOR_HISTORY_STATUSES)

        return self._doctor_list(principal, orders)
