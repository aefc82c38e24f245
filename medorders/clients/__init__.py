from .base import BaseAppointmentClient, BaseUserClient, ClientError
from .factory import get_appointment_client, get_user_client
from .types import Appointment, PatientProfile

__all__ = [
    "Appointment",
    "BaseAppointmentClient",
    "BaseUserClient",
    "ClientError",
    "PatientProfile",
    "get_appointment_client",
    "get_user_client",
]
