"""
Reviewer Assignment: 决策页的审稿人分配会话

中文注释:
- 已分配审稿人来自 Reviews -> User；若后端给了 ReviewerOrder，则按其 reconcile。
- 新选择的审稿人放在 pending 列表中，保存后清空；已分配的审稿人不能重复选择。
- 分配审稿人不受论文锁定状态限制（由编辑操作，非作者）。
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from submitease.core.errors import DuplicateEntityError
from submitease.core.policy import REVIEWER_POLICY, MinimumCardinalityPolicy
from submitease.core.reorderable_list import ReorderableList
from submitease.models.paper import Paper
from submitease.models.participant import Participant
from submitease.services.author_editor import parse_user_id

logger = logging.getLogger("submitease.reviewer_assignment")


class ReviewerAssignment:
    def __init__(
        self,
        paper: Paper,
        *,
        policy: MinimumCardinalityPolicy = REVIEWER_POLICY,
        strict_add: bool = False,
    ):
        self.policy = policy
        self.strict_add = strict_add
        self.paper: Paper = paper
        self.assigned: ReorderableList[Participant] = ReorderableList()
        self.pending: ReorderableList[Participant] = ReorderableList()
        self.load(paper)

    def load(self, paper: Paper) -> None:
        self.paper = paper
        self.assigned = ReorderableList.from_reconciled(paper.ReviewerOrder, paper.reviewers)

    def is_assigned(self, user_id: Any) -> bool:
        return self.assigned.contains(user_id)

    def candidates(self, directory: Iterable[Participant]) -> list[Participant]:
        return [
            u
            for u in directory
            if not self.is_assigned(u.id) and not self.pending.contains(u.id)
        ]

    def add(self, participant: Participant) -> bool:
        if self.is_assigned(participant.id):
            if self.strict_add:
                raise DuplicateEntityError(participant.id)
            return False
        return self.pending.add(participant, strict=self.strict_add)

    def select_by_id(self, raw_user_id: Any, directory: Iterable[Participant]) -> bool:
        user_id = parse_user_id(raw_user_id)
        if user_id is None:
            return False
        user = next((u for u in directory if u.id == user_id), None)
        if user is None:
            logger.info("[ReviewerAssignment] user %s not found in directory", user_id)
            return False
        return self.add(user)

    def remove(self, index: int) -> Participant:
        self.policy.check_removal(len(self.pending))
        return self.pending.remove_at(index)

    def on_drag_end(self, source_index: int, destination_index: Optional[int]) -> None:
        if destination_index is None:
            return
        self.pending.move(source_index, destination_index)

    def save_payload(self, paper_id: Any = None) -> dict[str, Any]:
        reviewer_ids = self.pending.to_order_vector()
        return {
            "paperId": self.paper.id if paper_id is None else paper_id,
            "reviewerIds": list(reviewer_ids),
            "order": self.assigned.to_order_vector() + reviewer_ids,
        }

    def apply_saved(self, paper: Paper) -> None:
        self.load(paper)
        self.pending = ReorderableList()
