"""
工厂函数：根据 action 字符串返回对应 Parser。

新增接口只需：
  1. 在 parsers.py 新建 Parser 类
  2. 在此处 _build_registry 加一行
"""

from typing import Any

from ..exceptions import InternalError
from .base import BaseIntakeParser


def _build_registry() -> dict[str, type[BaseIntakeParser]]:
    # 延迟导入，避免循环依赖
    from .parsers import (
        CreateOrderParser,
        DeliveryInfoIdParser,
        DeliveryInfoParser,
        DeliveryInfoUpdateParser,
        OrderActionParser,
        UpdateOrderParser,
    )

    return {
        "create_order":         CreateOrderParser,
        "update_order":         UpdateOrderParser,
        "order_action":         OrderActionParser,
        "delivery_info":        DeliveryInfoParser,
        "delivery_info_update": DeliveryInfoUpdateParser,
        "delivery_info_id":     DeliveryInfoIdParser,
    }


def get_parser(action: str, data: Any) -> BaseIntakeParser:
    """
    根据 action 返回已实例化的 Parser。

    Raises:
        InternalError: 未注册的 action（属于代码错误，不是请求错误）
    """
    registry = _build_registry()
    parser_cls = registry.get(action)

    if parser_cls is None:
        raise InternalError(
            message=f"Unknown intake action: {action!r}.",
            code="UNKNOWN_INTAKE_ACTION",
        )

    return parser_cls(data)


def parse_request(action: str, data: Any) -> Any:
    """get_parser(...).process() 的简写，view 层直接用这个。"""
    return get_parser(action, data).process()
