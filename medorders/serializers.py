"""
Response serializers: ORM 对象 → JSON-able dict。

只负责「输出格式化」，不做任何解析或校验。
输入解析和校验在 medorders/intake/ parser 系统。

约定：
  ID        → UUID 字符串
  时间      → RFC3339，精确到秒，带 UTC 偏移；None 保持 None
  金额/数量 → JSON number
"""

from datetime import timezone as dt_timezone


def format_timestamp(value):
    if value is None:
        return None
    return value.astimezone(dt_timezone.utc).replace(microsecond=0).isoformat()


def format_amount(value):
    if value is None:
        return None
    return float(value)


def _uuid_or_none(value):
    return str(value) if value is not None else None


# ── Order ──────────────────────────────────────────────────────────────────

def serialize_order_item(item):
    """
    药品已软删除时 active_medicine 为 None：medicine_name 为空串。
    """
    medicine = getattr(item, 'active_medicine', None)
    return {
        'medicine_id': str(item.medicine_id),
        'medicine_name': medicine.name if medicine is not None else '',
        'quantity': format_amount(item.quantity),
    }


def serialize_order_detail(order, delivery=None):
    """delivery: Delivery 或 None（没有配送记录 / 查询失败）。"""
    return {
        'order_id': str(order.id),
        'patient_id': str(order.patient_id),
        'doctor_id': _uuid_or_none(order.doctor_id),
        'total_amount': format_amount(order.total_amount),
        'note': order.note,
        'submitted_at': format_timestamp(order.submitted_at),
        'reviewed_at': format_timestamp(order.reviewed_at),
        'status': order.status,
        'delivery_status': delivery.status if delivery is not None else None,
        'delivery_at': format_timestamp(delivery.delivered_at) if delivery is not None else None,
        'created_at': format_timestamp(order.created_at),
        'updated_at': format_timestamp(order.updated_at),
        'order_items': [serialize_order_item(item) for item in order.items.all()],
    }


def serialize_patient_info(profile):
    if profile is None:
        return None
    return {
        'patient_id': profile.id,
        'first_name': profile.first_name,
        'last_name': profile.last_name,
        'gender': profile.gender,
        'phone_number': profile.phone_number,
    }


def serialize_doctor_order_row(order, delivery=None, profile=None):
    """医生列表的一行：订单详情 + patient_info。"""
    row = serialize_order_detail(order, delivery)
    row['patient_info'] = serialize_patient_info(profile)
    return row


def serialize_order_list(rows):
    return {'orders': rows, 'total': len(rows)}


# ── Medicine ───────────────────────────────────────────────────────────────

def serialize_medicine(medicine):
    return {
        'id': str(medicine.id),
        'name': medicine.name,
        'price': format_amount(medicine.price),
        'stock': format_amount(medicine.stock),
        'unit': medicine.unit,
        'created_at': format_timestamp(medicine.created_at),
        'updated_at': format_timestamp(medicine.updated_at),
    }


# ── DeliveryInformation ────────────────────────────────────────────────────

def serialize_delivery_info(info):
    return {
        'id': str(info.id),
        'user_id': str(info.user_id),
        'address': info.address,
        'phone_number': info.phone_number,
        'version': info.version,
        'delivery_method': info.delivery_method,
        'created_at': format_timestamp(info.created_at),
    }
