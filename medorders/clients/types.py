"""
外部服务返回的标准结构。

所有 Client 实现都返回这些 dataclass，
业务层（services/）只认识这个格式，不关心背后是 HTTP 还是别的。
"""

from dataclasses import dataclass


@dataclass
class Appointment:
    appointment_id: str
    patient_id: str
    doctor_id: str          # 新订单的 doctor_id 来自这里


@dataclass
class PatientProfile:
    id: str
    first_name: str = ''
    last_name: str = ''
    gender: str = ''
    phone_number: str = ''
