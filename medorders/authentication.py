"""
Bearer JWT → Principal。

token 由用户服务签发，这里只做校验和解析：
  sub / user_id → subject_id
  role          → "patient" | "doctor" | ...

解析结果作为 request.user，由 view 显式传给 service，
service 不读取任何请求级全局状态。
"""

import uuid
from dataclasses import dataclass

from django.conf import settings
from jose import JWTError, jwt
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from .exceptions import BadRequestError

ROLE_PATIENT = 'patient'
ROLE_DOCTOR = 'doctor'


@dataclass(frozen=True)
class Principal:
    subject_id: str
    role: str
    token: str | None = None

    # DRF 的 IsAuthenticated 只看这个属性
    is_authenticated = True

    @property
    def is_patient(self) -> bool:
        return self.role == ROLE_PATIENT

    @property
    def is_doctor(self) -> bool:
        return self.role == ROLE_DOCTOR

    def subject_uuid(self) -> uuid.UUID:
        try:
            return uuid.UUID(str(self.subject_id))
        except (TypeError, ValueError) as exc:
            raise BadRequestError('invalid user ID', code='INVALID_USER_ID') from exc


def decode_token(token: str) -> Principal:
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise AuthenticationFailed('Invalid or expired token') from exc

    subject_id = claims.get('sub') or claims.get('user_id')
    role = (claims.get('role') or '').strip().lower()
    if not subject_id or not role:
        raise AuthenticationFailed('Token is missing subject or role')

    return Principal(subject_id=str(subject_id), role=role, token=token)


class JWTAuthentication(BaseAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        header = get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None

        if len(header) != 2:
            raise AuthenticationFailed('Invalid Authorization header')

        try:
            token = header[1].decode()
        except UnicodeError as exc:
            raise AuthenticationFailed('Invalid Authorization header') from exc

        principal = decode_token(token)
        return principal, token

    def authenticate_header(self, request):
        return self.keyword
