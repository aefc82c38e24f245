"""
Unit tests for exception classes and unified_exception_handler.

不需要数据库，纯 Python 测试：
1. BaseAppException 默认值
2. 各子类的默认 type / code / http_status
3. 构造时覆盖 code / http_status
4. unified_exception_handler 把异常转成正确的 JsonResponse
"""
import json

import pytest
from django.db import DatabaseError, IntegrityError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions

from medorders.exception_handler import unified_exception_handler
from medorders.exceptions import (
    BadRequestError,
    BaseAppException,
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)


# -------------------------------------------------------------------
# Exception classes
# -------------------------------------------------------------------

class TestBaseAppException:

    def test_defaults(self):
        exc = BaseAppException('something broke')
        assert exc.message == 'something broke'
        assert exc.type == 'error'
        assert exc.code == 'UNKNOWN_ERROR'
        assert exc.http_status == 500
        assert exc.detail is None

    def test_override_code_and_status(self):
        exc = BaseAppException('bad', code='CUSTOM_CODE', http_status=418)
        assert exc.code == 'CUSTOM_CODE'
        assert exc.http_status == 418

    def test_detail_preserved(self):
        exc = BaseAppException('bad', detail={'key': 'value'})
        assert exc.detail == {'key': 'value'}


@pytest.mark.parametrize('cls, type_, code, status', [
    (BadRequestError, 'bad_request', 'BAD_REQUEST', 400),
    (UnauthorizedError, 'unauthorized', 'UNAUTHORIZED', 401),
    (ForbiddenError, 'forbidden', 'FORBIDDEN', 403),
    (NotFoundError, 'not_found', 'NOT_FOUND', 404),
    (ConflictError, 'conflict', 'CONFLICT', 409),
    (InternalError, 'internal', 'INTERNAL_ERROR', 500),
])
def test_subclass_defaults(cls, type_, code, status):
    exc = cls('x')
    assert (exc.type, exc.code, exc.http_status) == (type_, code, status)


def test_custom_code_keeps_status():
    exc = NotFoundError('order not found', code='ORDER_NOT_FOUND')
    assert exc.code == 'ORDER_NOT_FOUND'
    assert exc.http_status == 404  # status 没变


# -------------------------------------------------------------------
# unified_exception_handler
# -------------------------------------------------------------------

def handle(exc):
    response = unified_exception_handler(exc, {})
    return response, json.loads(response.content)


class TestUnifiedExceptionHandler:

    def test_app_exception(self):
        response, body = handle(ConflictError('order already paid or processed', code='ORDER_ALREADY_PAID'))

        assert response.status_code == 409
        assert body == {
            'type': 'conflict',
            'code': 'ORDER_ALREADY_PAID',
            'message': 'order already paid or processed',
        }

    def test_detail_included_when_present(self):
        response, body = handle(BadRequestError('bad', detail={'errors': []}))
        assert body['detail'] == {'errors': []}

    def test_internal_error_is_logged(self, caplog):
        response, body = handle(InternalError('failed to get latest appointment'))
        assert response.status_code == 500
        assert 'failed to get latest appointment' in caplog.text

    def test_drf_not_authenticated(self):
        response, body = handle(drf_exceptions.NotAuthenticated())
        assert response.status_code == 401
        assert body['type'] == 'unauthorized'
        assert response['WWW-Authenticate'] == 'Bearer'

    def test_drf_authentication_failed(self):
        response, body = handle(drf_exceptions.AuthenticationFailed('Invalid or expired token'))
        assert response.status_code == 401
        assert body['message'] == 'Invalid or expired token'

    def test_drf_parse_error(self):
        response, body = handle(drf_exceptions.ParseError('JSON parse error'))
        assert response.status_code == 400
        assert body['code'] == 'INVALID_BODY'

    def test_drf_permission_denied(self):
        response, body = handle(drf_exceptions.PermissionDenied())
        assert response.status_code == 403
        assert body['type'] == 'forbidden'

    def test_database_error(self, caplog):
        response, body = handle(IntegrityError('check constraint failed'))
        assert response.status_code == 500
        assert body == {'type': 'internal', 'code': 'STORAGE_ERROR', 'message': 'Storage failure'}
        assert 'Database error' in caplog.text

    def test_plain_database_error(self):
        response, body = handle(DatabaseError('gone'))
        assert body['type'] == 'internal'

    def test_method_not_allowed_keeps_status(self):
        response, body = handle(drf_exceptions.MethodNotAllowed('PATCH'))
        assert response.status_code == 405
        assert body == {
            'type': 'bad_request',
            'code': 'METHOD_NOT_ALLOWED',
            'message': 'Method "PATCH" not allowed.',
        }

    @pytest.mark.parametrize('exc, status, code', [
        (drf_exceptions.UnsupportedMediaType('text/plain'), 415, 'UNSUPPORTED_MEDIA_TYPE'),
        (drf_exceptions.NotAcceptable(), 406, 'NOT_ACCEPTABLE'),
        (drf_exceptions.Throttled(wait=3), 429, 'THROTTLED'),
    ])
    def test_other_drf_exceptions_use_unified_body(self, exc, status, code):
        response, body = handle(exc)
        assert response.status_code == status
        assert body['type'] == 'bad_request'
        assert body['code'] == code
        assert body['message']

    def test_drf_server_side_exception_is_internal(self):
        response, body = handle(drf_exceptions.APIException())
        assert response.status_code == 500
        assert (body['type'], body['code']) == ('internal', 'ERROR')

    def test_django_http404(self):
        response, body = handle(Http404('nothing here'))
        assert response.status_code == 404
        assert body['type'] == 'not_found'

    def test_unknown_exception_falls_through(self):
        assert unified_exception_handler(ValueError('boom'), {}) is None
