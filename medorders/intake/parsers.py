"""
具体 Parser 实现。

已注册 action：
  create_order    : CreateOrderParser       { "note"? }
  update_order    : UpdateOrderParser       { "order_id", "order_items": [{ "medicine_id", "quantity" }] }
  order_action    : OrderActionParser       { "order_id" }   cancel / confirm / reject / pay
  delivery_info   : DeliveryInfoParser      { "address", "phone_number", "delivery_method" }
  delivery_info_update: DeliveryInfoUpdateParser   同上 + "id"
  delivery_info_id: DeliveryInfoIdParser    { "id" }
"""

from decimal import Decimal, InvalidOperation

from ..models import DeliveryMethod
from .base import BaseIntakeParser
from .types import (
    CreateOrderRequest,
    DeliveryInfoIdRequest,
    DeliveryInfoRequest,
    OrderActionRequest,
    OrderItemInput,
    UpdateOrderRequest,
)

# order_items.quantity 是 decimal(12,2)
MAX_QUANTITY = Decimal("10000000000")


class CreateOrderParser(BaseIntakeParser):
    action = "create_order"

    def transform(self) -> CreateOrderRequest:
        return CreateOrderRequest(note=self.optional_str("note"))


# ── UpdateOrderParser ──────────────────────────────────────────────────────
#
# {
#   "order_id": "0190...",
#   "order_items": [
#     { "medicine_id": "6a1f...", "quantity": 2 },
#     { "medicine_id": "c03e...", "quantity": "1.5" }
#   ]
# }

class UpdateOrderParser(BaseIntakeParser):
    action = "update_order"

    def transform(self) -> UpdateOrderRequest:
        order_id = self.required_str("order_id", "order ID")

        raw_items = self._parsed.get("order_items")
        if raw_items is None:
            self.add_error("order_items", "order_items is required")
            raw_items = []
        elif not isinstance(raw_items, list):
            self.add_error("order_items", "order_items must be a list")
            raw_items = []

        items = []
        for i, raw in enumerate(raw_items):
            item = self._transform_item(i, raw)
            if item is not None:
                items.append(item)

        return UpdateOrderRequest(order_id=order_id, items=items)

    def _transform_item(self, index: int, raw) -> OrderItemInput | None:
        prefix = f"order_items[{index}]"
        if not isinstance(raw, dict):
            self.add_error(prefix, "order item must be an object")
            return None

        medicine_id = raw.get("medicine_id")
        if not isinstance(medicine_id, str) or not medicine_id.strip():
            self.add_error(f"{prefix}.medicine_id", "medicine_id is required")
            return None

        quantity = self._to_decimal(raw.get("quantity"))
        if quantity is None:
            self.add_error(f"{prefix}.quantity", "quantity must be a number")
            return None
        if quantity <= 0:
            self.add_error(f"{prefix}.quantity", "quantity must be greater than 0")
            return None
        if quantity >= MAX_QUANTITY:
            self.add_error(f"{prefix}.quantity", "quantity is too large")
            return None
        if quantity.as_tuple().exponent < -2:
            self.add_error(f"{prefix}.quantity", "quantity supports at most 2 decimal places")
            return None

        return OrderItemInput(medicine_id=medicine_id.strip(), quantity=quantity)

    @staticmethod
    def _to_decimal(value) -> Decimal | None:
        # bool 是 int 的子类，要单独排除
        if value is None or isinstance(value, bool):
            return None
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return None
        if not result.is_finite():
            return None
        return result


class OrderActionParser(BaseIntakeParser):
    action = "order_action"

    def transform(self) -> OrderActionRequest:
        return OrderActionRequest(order_id=self.required_str("order_id", "order ID"))


class DeliveryInfoParser(BaseIntakeParser):
    action = "delivery_info"

    def transform(self) -> DeliveryInfoRequest:
        address = self.required_str("address")
        phone_number = self.required_str("phone_number")
        delivery_method = self.required_str("delivery_method")

        if delivery_method and delivery_method not in DeliveryMethod.values:
            self.add_error(
                "delivery_method",
                f"delivery_method must be one of: {', '.join(DeliveryMethod.values)}",
            )

        return DeliveryInfoRequest(
            address=address,
            phone_number=phone_number,
            delivery_method=delivery_method,
        )


class DeliveryInfoUpdateParser(DeliveryInfoParser):
    action = "delivery_info_update"

    def transform(self) -> DeliveryInfoRequest:
        info_id = self.required_str("id")
        request = super().transform()
        request.id = info_id
        return request


class DeliveryInfoIdParser(BaseIntakeParser):
    action = "delivery_info_id"

    def transform(self) -> DeliveryInfoIdRequest:
        return DeliveryInfoIdRequest(id=self.required_str("id"))
