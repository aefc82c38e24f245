"""
外部服务 Client 的抽象基类。

每个新实现只需：
1. 继承 BaseUserClient / BaseAppointmentClient
2. 实现抽象方法
3. 在 factory.py 的 _build_registry 注册一行

services/ 完全不知道背后用哪种实现。
"""

from abc import ABC, abstractmethod

from .types import Appointment, PatientProfile


class ClientError(Exception):
    """外部服务调用失败（网络、超时、非预期状态码、响应格式错误）。"""


class BaseAppointmentClient(ABC):

    @abstractmethod
    def get_latest_appointment_by_patient_id(self, patient_id: str, token: str | None = None) -> Appointment | None:
        """
        查询患者最近一次预约。

        Returns:
            Appointment，或 None（该患者没有任何预约记录）

        Raises:
            ClientError: 调用失败，由 OrderService 转成 InternalError
        """


class BaseUserClient(ABC):

    @abstractmethod
    def get_patients_by_ids(self, patient_ids: list[str], token: str | None = None) -> list[PatientProfile]:
        """
        批量查询患者资料。不存在的 ID 不出现在返回结果里。

        Raises:
            ClientError: 调用失败，由 OrderService 降级为 patient_info = null
        """
