"""
具体 Client 实现。

新增实现：在此文件添加一个类，然后在 factory.py 注册即可。

已注册实现：
  http    : HttpAppointmentClient / HttpUserClient   (requests，调用预约服务和用户服务)
  disabled: DisabledAppointmentClient / DisabledUserClient   (本地开发：没有预约、没有患者资料)
"""

import logging

import requests
from django.conf import settings

from .base import BaseAppointmentClient, BaseUserClient, ClientError
from .types import Appointment, PatientProfile

logger = logging.getLogger(__name__)


def _auth_headers(token):
    headers = {'Accept': 'application/json'}
    if token:
        headers['Authorization'] = f'Bearer {token}'
    return headers


# ── HttpAppointmentClient ─────────────────────────────────────────────────
#
# GET {APPOINTMENT_SERVICE_URL}/api/appointment/v1/appointments/patient/{patient_id}/latest
#   200 → { "appointment_id": ..., "patient_id": ..., "doctor_id": ... }
#         （也接受外面包一层 "appointment"）
#   404 → 该患者没有预约

class HttpAppointmentClient(BaseAppointmentClient):

    def __init__(self, base_url=None, timeout=None):
        self.base_url = (base_url or settings.APPOINTMENT_SERVICE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.EXTERNAL_CLIENT_TIMEOUT_SECONDS

    def get_latest_appointment_by_patient_id(self, patient_id, token=None):
        url = f'{self.base_url}/api/appointment/v1/appointments/patient/{patient_id}/latest'
        try:
            response = requests.get(url, headers=_auth_headers(token), timeout=self.timeout)
        except requests.RequestException as exc:
            raise ClientError(f'appointment service unreachable: {exc}') from exc

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise ClientError(f'appointment service returned {response.status_code}')

        try:
            payload = response.json()
        except ValueError as exc:
            raise ClientError('appointment service returned invalid JSON') from exc

        if isinstance(payload, dict) and isinstance(payload.get('appointment'), dict):
            payload = payload['appointment']
        if not payload:
            return None
        if not isinstance(payload, dict):
            raise ClientError('appointment service returned unexpected payload')

        doctor_id = payload.get('doctor_id')
        if not doctor_id:
            raise ClientError('appointment payload has no doctor_id')

        return Appointment(
            appointment_id=str(payload.get('appointment_id') or payload.get('id') or ''),
            patient_id=str(payload.get('patient_id') or patient_id),
            doctor_id=str(doctor_id),
        )


# ── HttpUserClient ────────────────────────────────────────────────────────
#
# POST {USER_SERVICE_URL}/api/user/v1/patients/batch   body: { "ids": [...] }
#   200 → { "patients": [ { "id", "first_name", "last_name", "gender", "phone_number" } ] }
#         （也接受直接返回列表）

class HttpUserClient(BaseUserClient):

    def __init__(self, base_url=None, timeout=None):
        self.base_url = (base_url or settings.USER_SERVICE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.EXTERNAL_CLIENT_TIMEOUT_SECONDS

    def get_patients_by_ids(self, patient_ids, token=None):
        if not patient_ids:
            return []

        url = f'{self.base_url}/api/user/v1/patients/batch'
        try:
            response = requests.post(
                url,
                json={'ids': list(patient_ids)},
                headers=_auth_headers(token),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ClientError(f'user service unreachable: {exc}') from exc

        if response.status_code != 200:
            raise ClientError(f'user service returned {response.status_code}')

        try:
            payload = response.json()
        except ValueError as exc:
            raise ClientError('user service returned invalid JSON') from exc

        rows = payload.get('patients', []) if isinstance(payload, dict) else payload
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise ClientError('user service returned unexpected payload')

        return [
            PatientProfile(
                id=str(row.get('id') or row.get('patient_id')),
                first_name=row.get('first_name') or '',
                last_name=row.get('last_name') or '',
                gender=row.get('gender') or '',
                phone_number=row.get('phone_number') or '',
            )
            for row in rows
            if row.get('id') or row.get('patient_id')
        ]


# ── Disabled ──────────────────────────────────────────────────────────────
#
# 本地开发 / 测试用：不发任何请求。

class DisabledAppointmentClient(BaseAppointmentClient):

    def get_latest_appointment_by_patient_id(self, patient_id, token=None):
        logger.debug('appointment lookup disabled, patient_id=%s', patient_id)
        return None


class DisabledUserClient(BaseUserClient):

    def get_patients_by_ids(self, patient_ids, token=None):
        return []
