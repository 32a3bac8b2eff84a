"""
Review Table: 决策页评审列表的筛选 + 排序，以及催审分组。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from submitease.models.paper import Review
from submitease.models.participant import Participant

SORT_COLUMNS = ("submittedAt", "recommendation", "status", "score")
NOT_AVAILABLE = "N/A"


def display_review(review: Review) -> Review:
    """未提交的评审在列表中显示 N/A（返回副本，不改原对象）。"""
    if review.is_submitted:
        return review
    return review.model_copy(update={"Comment": NOT_AVAILABLE, "Recommendation": NOT_AVAILABLE})


def _sort_key(review: Review, column: str):
    if column == "recommendation":
        return review.Recommendation or ""
    if column == "status":
        return review.Status or ""
    if column == "score":
        return review.mean_score()
    return review.submittedAt.timestamp() if review.submittedAt else 0


@dataclass
class ReviewTable:
    sort_column: str = "submittedAt"
    sort_order: str = "desc"
    search_term: str = ""

    def sort_by(self, column: str) -> None:
        if column == self.sort_column:
            self.sort_order = "desc" if self.sort_order == "asc" else "asc"
        else:
            self.sort_column = column
            self.sort_order = "asc"

    def _matches(self, review: Review, reviewers: list[Participant]) -> bool:
        needle = (self.search_term or "").lower()
        if not needle:
            return True
        reviewer = next((r for r in reviewers if r.id == review.ReviewerId), None)
        name = reviewer.full_name.lower() if reviewer else ""
        email = (reviewer.email or "").lower() if reviewer else ""
        haystack = (
            name,
            email,
            (review.Comment or "").lower(),
            (review.Recommendation or "").lower(),
            (review.Status or "").lower(),
        )
        return any(needle in value for value in haystack)

    def rows(
        self, reviews: Iterable[Review], reviewers: Optional[Iterable[Participant]] = None
    ) -> list[Review]:
        reviewers = list(reviewers or [])
        shown = [display_review(r) for r in reviews]
        filtered = [r for r in shown if self._matches(r, reviewers)]
        column = self.sort_column if self.sort_column in SORT_COLUMNS else "submittedAt"
        return sorted(
            filtered,
            key=lambda r: _sort_key(r, column),
            reverse=self.sort_order != "asc",
        )


@dataclass
class ReminderGroups:
    under_review: list[int] = field(default_factory=list)
    pending: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.under_review and not self.pending


def remindable(
    selected_ids: Iterable[int],
    reviews: Iterable[Review],
    invited: Iterable[Participant] = (),
) -> ReminderGroups:
    """
    中文注释:
    - 已提交（Submitted）的审稿人不催；
    - Under Review -> 催审；Pending Invitation 或刚邀请的 -> 催接受邀请。
    """
    by_reviewer = {}
    for review in reviews:
        by_reviewer.setdefault(review.ReviewerId, review)
    invited_ids = {u.id for u in invited}

    groups = ReminderGroups()
    for rid in selected_ids:
        review = by_reviewer.get(rid)
        status = (review.Status or "").lower() if review else ""
        if status == "submitted":
            continue
        if status == "under review":
            groups.under_review.append(rid)
        elif status == "pending invitation" or rid in invited_ids:
            groups.pending.append(rid)
    return groups
