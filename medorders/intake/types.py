"""
请求体解析后的标准结构。

所有 Parser 的 transform() 返回这些 dataclass，
业务层（services/）只消费这些结构，永远不碰原始 request.data。
"""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class CreateOrderRequest:
    note: str | None = None


@dataclass
class OrderItemInput:
    medicine_id: str
    quantity: Decimal


@dataclass
class UpdateOrderRequest:
    order_id: str
    items: list[OrderItemInput] = field(default_factory=list)


@dataclass
class OrderActionRequest:
    """cancel / confirm / reject / pay 共用：只带一个 order_id。"""

    order_id: str


@dataclass
class DeliveryInfoRequest:
    """
    create 时 id 为空；update 时 id 必填。
    """

    address: str
    phone_number: str
    delivery_method: str
    id: str = ""


@dataclass
class DeliveryInfoIdRequest:
    id: str
