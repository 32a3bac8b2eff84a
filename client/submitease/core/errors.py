from __future__ import annotations

from typing import Any


class OrderingError(Exception):
    """作者/审稿人列表编辑相关错误的基类。"""


class IndexOutOfRangeError(OrderingError, IndexError):
    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"index {index} out of range for list of length {length}")


class DuplicateEntityError(OrderingError, ValueError):
    def __init__(self, entity_id: Any):
        self.entity_id = entity_id
        super().__init__(f"entity {entity_id!r} is already in the list")


class MinimumCardinalityError(OrderingError):
    """
    删除会让列表少于最小数量（例如“至少保留一位作者”）。

    中文注释: message 直接面向用户展示。
    """

    def __init__(self, message: str, *, minimum: int):
        self.minimum = minimum
        super().__init__(message)


class PaperLockedError(OrderingError):
    def __init__(self, status: str | None):
        self.status = status
        super().__init__(f"paper is not editable in status {status!r}")
