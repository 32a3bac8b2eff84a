"""
Author Editor: 论文作者列表的编辑会话（会议论文 / 期刊稿件 / 修订稿共用）

中文注释:
1. 加载时按 AuthorOrder 对 Authors 做 reconcile，得到初始工作列表。
2. 只有 Pending Submission 状态可编辑；否则所有写操作抛 PaperLockedError。
3. “至少一位作者”的校验在这里（policy）完成，ReorderableList 本身不关心业务规则。
4. 保存成功后用后端返回的论文重新 reconcile，替换工作列表。
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from submitease.core.config import PortalConfig
from submitease.core.errors import PaperLockedError
from submitease.core.policy import AUTHOR_POLICY, MinimumCardinalityPolicy
from submitease.core.reorderable_list import ReorderableList
from submitease.models.paper import Paper
from submitease.models.participant import Participant

logger = logging.getLogger("submitease.author_editor")


def parse_user_id(raw: Any) -> Optional[int]:
    """下拉框传来的 id 可能是字符串；空值/非法值返回 None。"""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text, 10)
    except ValueError:
        return None


class AuthorEditor:
    def __init__(
        self,
        paper: Paper,
        *,
        policy: MinimumCardinalityPolicy = AUTHOR_POLICY,
        config: Optional[PortalConfig] = None,
    ):
        self.policy = policy
        self.strict_add = bool(config.strict_add) if config else False
        self.paper: Paper = paper
        self.authors: ReorderableList[Participant] = ReorderableList()
        self.load(paper)

    @property
    def is_editable(self) -> bool:
        return self.paper.is_editable

    def load(self, paper: Paper) -> None:
        self.paper = paper
        self.authors = ReorderableList.from_reconciled(paper.AuthorOrder, paper.Authors)

    def ensure_editable(self) -> None:
        if not self.is_editable:
            raise PaperLockedError(self.paper.Status)

    def candidates(self, directory: Iterable[Participant]) -> list[Participant]:
        return [u for u in directory if not self.authors.contains(u.id)]

    def add(self, participant: Participant) -> bool:
        self.ensure_editable()
        return self.authors.add(participant, strict=self.strict_add)

    def add_by_id(self, raw_user_id: Any, directory: Iterable[Participant]) -> bool:
        self.ensure_editable()
        user_id = parse_user_id(raw_user_id)
        if user_id is None:
            return False
        user = next((u for u in directory if u.id == user_id), None)
        if user is None:
            logger.info("[AuthorEditor] user %s not found in directory", user_id)
            return False
        return self.authors.add(user, strict=self.strict_add)

    def remove(self, index: int) -> Participant:
        self.ensure_editable()
        self.policy.check_removal(len(self.authors))
        return self.authors.remove_at(index)

    def on_drag_end(self, source_index: int, destination_index: Optional[int]) -> None:
        """拖拽结束回调；拖到列表外（destination 为空）时忽略。"""
        self.ensure_editable()
        if destination_index is None:
            return
        self.authors.move(source_index, destination_index)

    def save_payload(self) -> dict[str, list[int]]:
        order = self.authors.to_order_vector()
        return {"authorIds": list(order), "order": order}

    def apply_saved(self, paper: Paper) -> None:
        self.load(paper)
