"""
BaseIntakeParser: 所有请求体 Parser 的抽象基类。

每个新接口只需：
1. 继承 BaseIntakeParser
2. 实现 transform()，必要时 override validate()
3. 在 factory.py 的 _build_registry 注册一行
"""

from abc import ABC, abstractmethod
from typing import Any

from ..exceptions import BadRequestError


class BaseIntakeParser(ABC):
    """
    三步流水线：parse → transform → validate

    parse() 只保证请求体是 JSON 对象；
    transform() 把它转换成 types.py 里的 dataclass，同时收集字段错误；
    validate() 把收集到的错误统一抛成 BadRequestError。
    """

    # 子类声明自己对应的 action 标识符（与 factory 注册键一致）
    action: str = ""

    def __init__(self, data: Any):
        self._data = data
        self._parsed: dict = {}
        self._errors: list[dict] = []

    # ── 字段工具 ──────────────────────────────────────────────────────────

    def add_error(self, field: str, message: str) -> None:
        self._errors.append({"field": field, "message": message})

    def required_str(self, key: str, label: str | None = None) -> str:
        value = self._parsed.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            self.add_error(key, f"{label or key} is required")
            return ""
        if not isinstance(value, str):
            self.add_error(key, f"{label or key} must be a string")
            return ""
        return value.strip()

    def optional_str(self, key: str) -> str | None:
        value = self._parsed.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            self.add_error(key, f"{key} must be a string")
            return None
        return value

    # ── 必须实现 ───────────────────────────────────────────────────────────

    def parse(self) -> dict:
        data = self._data
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise BadRequestError(
                message="Request body must be a JSON object.",
                code="INVALID_BODY",
            )
        self._parsed = dict(data)
        return self._parsed

    @abstractmethod
    def transform(self) -> Any:
        """将 self._parsed 转换为对应的请求 dataclass。"""

    # ── 提供默认实现，子类可 override ──────────────────────────────────────

    def validate(self, request: Any) -> None:
        if self._errors:
            raise BadRequestError(
                message="Request validation failed.",
                code="VALIDATION_ERROR",
                detail={"errors": self._errors},
            )

    # ── 对外统一入口 ───────────────────────────────────────────────────────

    def process(self) -> Any:
        """parse → transform → validate，返回校验通过的请求对象。"""
        self.parse()
        request = self.transform()
        self.validate(request)
        return request
