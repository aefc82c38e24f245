"""
统一异常处理器。

挂到 DRF 的 EXCEPTION_HANDLER setting 上。
所有响应（无论成功还是失败）前端都能用同一套逻辑判断：
  有 type 字段  → 出问题了
  没有 type 字段  → 成功

统一错误响应格式：
{
    "type":    "bad_request" | "unauthorized" | "forbidden" | "not_found" | "conflict" | "internal",
    "code":    "INVALID_ORDER_ID",
    "message": "invalid order ID",
    "detail":  { ... }  // 可选
}
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import DatabaseError
from django.http import Http404, JsonResponse
from rest_framework import exceptions as drf_exceptions
from rest_framework.views import exception_handler as drf_default_handler

from .exceptions import (
    BaseAppException,
    BadRequestError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


def render_app_exception(exc):
    body = {
        'type': exc.type,
        'code': exc.code,
        'message': exc.message,
    }
    if exc.detail is not None:
        body['detail'] = exc.detail
    return JsonResponse(body, status=exc.http_status)


def _translate_drf_exception(exc):
    """DRF 自带异常 → 我们的异常体系。无法对应的返回 None。"""
    if isinstance(exc, drf_exceptions.ParseError):
        return BadRequestError('Invalid request body', code='INVALID_BODY', detail=exc.detail)
    if isinstance(exc, drf_exceptions.ValidationError):
        return BadRequestError('Request validation failed', code='VALIDATION_ERROR', detail=exc.detail)
    if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
        return UnauthorizedError(str(exc.detail))
    if isinstance(exc, drf_exceptions.PermissionDenied):
        return ForbiddenError(str(exc.detail))
    if isinstance(exc, drf_exceptions.NotFound):
        return NotFoundError(str(exc.detail))
    if isinstance(exc, Http404):
        return NotFoundError('Not found')
    if isinstance(exc, DjangoPermissionDenied):
        return ForbiddenError('Permission denied')
    if isinstance(exc, drf_exceptions.APIException):
        # 405 / 415 / 406 / 429 等：保留原状态码，code 取 DRF 的 default_code
        cls = InternalError if exc.status_code >= 500 else BadRequestError
        return cls(
            str(exc.detail),
            code=str(exc.default_code).upper(),
            http_status=exc.status_code,
        )
    return None


def unified_exception_handler(exc, context):
    """
    DRF exception handler entry point.

    优先级：
    1. BaseAppException 及其子类 → 统一格式
    2. DRF / Django 自带异常（解析 / 认证 / 权限 / 405 / 415 ...）→ 转成统一格式，保留状态码
    3. 数据库异常 → 记日志，返回 internal
    4. 其他异常 → 交给 DRF 默认处理（返回 None，由 Django 按 500 处理）
    """

    # --- 1. 我们自己的异常体系 ---
    if isinstance(exc, BaseAppException):
        if exc.http_status >= 500:
            logger.error('%s: %s', exc.code, exc.message, exc_info=exc.__cause__ or exc)
        return render_app_exception(exc)

    # --- 2. DRF 自带的异常 ---
    translated = _translate_drf_exception(exc)
    if translated is not None:
        response = render_app_exception(translated)
        if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
            response['WWW-Authenticate'] = 'Bearer'
        return response

    # --- 3. 存储失败 ---
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.exception('Database error in %s', type(view).__name__ if view else 'unknown view')
        return render_app_exception(InternalError('Storage failure', code='STORAGE_ERROR'))

    # --- 4. 其他的交给 DRF 默认处理 ---
    return drf_default_handler(exc, context)
