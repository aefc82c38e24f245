"""
统一异常体系。

所有业务异常继承 BaseAppException，包含：
- type:        错误类别（bad_request / unauthorized / forbidden / not_found / conflict / internal）
- code:        业务错误码（INVALID_ORDER_ID / ORDER_ALREADY_PAID / ...）
- message:     人类可读的描述
- detail:      可选的附加信息（dict / list / None）
- http_status: HTTP 状态码，与 type 一一对应

Service 层只需 raise，exception_handler 统一捕获并格式化响应。
"""


class BaseAppException(Exception):
    """所有业务异常的基类。"""

    type = 'error'
    code = 'UNKNOWN_ERROR'
    http_status = 500

    def __init__(self, message, code=None, detail=None, http_status=None):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        self.detail = detail
        super().__init__(message)


class BadRequestError(BaseAppException):
    """请求体 / ID 格式错误，或校验失败。400。"""

    type = 'bad_request'
    code = 'BAD_REQUEST'
    http_status = 400


class UnauthorizedError(BaseAppException):
    """缺少或无效的 bearer token。401。"""

    type = 'unauthorized'
    code = 'UNAUTHORIZED'
    http_status = 401


class ForbiddenError(BaseAppException):
    """角色不对，或不是该订单的所有者。403。"""

    type = 'forbidden'
    code = 'FORBIDDEN'
    http_status = 403


class NotFoundError(BaseAppException):
    type = 'not_found'
    code = 'NOT_FOUND'
    http_status = 404


class ConflictError(BaseAppException):
    """
    状态冲突，例如对已支付订单再次支付。409。

    与 ForbiddenError 的区别：Conflict 表示"已经做过了"，
    Forbidden 表示"当前状态不允许做"（cancelled / rejected）。
    """

    type = 'conflict'
    code = 'CONFLICT'
    http_status = 409


class InternalError(BaseAppException):
    """存储或外部服务失败。500。"""

    type = 'internal'
    code = 'INTERNAL_ERROR'
    http_status = 500
