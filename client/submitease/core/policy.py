from __future__ import annotations

from dataclasses import dataclass

from submitease.core.errors import MinimumCardinalityError


@dataclass(frozen=True)
class MinimumCardinalityPolicy:
    """
    删除前的最小数量校验（由页面控制器持有，不放进 ReorderableList）。

    中文注释: 作者列表 minimum=1；审稿人待选列表 minimum=0（可清空）。
    """

    minimum: int = 1
    label: str = "author"

    def message(self) -> str:
        if self.minimum == 1:
            return f"At least one {self.label} is required."
        return f"At least {self.minimum} {self.label}s are required."

    def check_removal(self, current_length: int) -> None:
        # 空列表不做判断，交给 remove_at 报越界
        if current_length > 0 and current_length - 1 < self.minimum:
            raise MinimumCardinalityError(self.message(), minimum=self.minimum)


AUTHOR_POLICY = MinimumCardinalityPolicy(minimum=1, label="author")
REVIEWER_POLICY = MinimumCardinalityPolicy(minimum=0, label="reviewer")
