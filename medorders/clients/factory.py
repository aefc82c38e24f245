"""
工厂函数：根据 settings.EXTERNAL_CLIENT_PROVIDER 返回对应的 Client 实例。

新增实现只需：
  1. 在 services.py 新建类
  2. 在此处 _build_registry 加一行
  不需要修改 OrderService 或任何业务代码。
"""

from django.conf import settings

from .base import BaseAppointmentClient, BaseUserClient


def _build_registry() -> dict[str, tuple[type[BaseAppointmentClient], type[BaseUserClient]]]:
    from .services import (
        DisabledAppointmentClient,
        DisabledUserClient,
        HttpAppointmentClient,
        HttpUserClient,
    )

    return {
        "http":     (HttpAppointmentClient, HttpUserClient),
        "disabled": (DisabledAppointmentClient, DisabledUserClient),
    }


def _resolve(provider=None):
    provider = provider or getattr(settings, "EXTERNAL_CLIENT_PROVIDER", "http")
    registry = _build_registry()
    pair = registry.get(provider)

    if pair is None:
        raise ValueError(
            f"Unknown EXTERNAL_CLIENT_PROVIDER: {provider!r}. "
            f"Known providers: {list(registry.keys())}"
        )

    return pair


def get_appointment_client(provider=None) -> BaseAppointmentClient:
    appointment_cls, _ = _resolve(provider)
    return appointment_cls()


def get_user_client(provider=None) -> BaseUserClient:
    _, user_cls = _resolve(provider)
    return user_cls()
