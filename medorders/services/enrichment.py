"""
尽力而为的补充查询结果（配送状态、患者资料）。

三种状态：
  found(data)   查到了
  missing       没有这条数据（还没有配送记录 / 用户服务里没有这个患者）
  unavailable   查询本身失败了（已记 WARNING 日志）

响应里 missing 和 unavailable 都渲染成 null，
但测试和日志可以区分"没有"和"查不到"。
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

FOUND = 'found'
MISSING = 'missing'
UNAVAILABLE = 'unavailable'


@dataclass(frozen=True)
class Enrichment:
    state: str
    data: Any = None

    @classmethod
    def found(cls, data):
        return cls(FOUND, data)

    @classmethod
    def missing(cls):
        return cls(MISSING)

    @classmethod
    def unavailable(cls):
        return cls(UNAVAILABLE)

    @property
    def is_found(self):
        return self.state == FOUND

    def value_or_none(self):
        return self.data if self.is_found else None


def attempt(lookup: Callable[[], Any], what: str, exceptions=(Exception,)) -> Enrichment:
    """
    执行一次补充查询。返回 None 视为 missing，抛出 exceptions 视为 unavailable。
    """
    try:
        result = lookup()
    except exceptions as exc:
        logger.warning('%s lookup failed: %s', what, exc)
        return Enrichment.unavailable()
    if result is None:
        return Enrichment.missing()
    return Enrichment.found(result)
