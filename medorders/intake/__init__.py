from .factory import get_parser, parse_request
from .types import (
    CreateOrderRequest,
    DeliveryInfoIdRequest,
    DeliveryInfoRequest,
    OrderActionRequest,
    OrderItemInput,
    UpdateOrderRequest,
)

__all__ = [
    "CreateOrderRequest",
    "DeliveryInfoIdRequest",
    "DeliveryInfoRequest",
    "OrderActionRequest",
    "OrderItemInput",
    "UpdateOrderRequest",
    "get_parser",
    "parse_request",
]
