from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from submitease.models.participant import Participant


class PaperStatus(str, Enum):
    """
    门户返回的论文状态字符串。

    中文注释:
    - 只有 Pending Submission 允许编辑作者/标题等；提交后页面进入只读。
    - 期刊修订流程以最新 revision 的状态为准（见 Paper.current_status）。
    """

    PENDING_SUBMISSION = "Pending Submission"
    UNDER_REVIEW = "Under Review"
    REVISION_REQUIRED = "Revision Required"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


def is_editable_status(status: str | None) -> bool:
    return (status or "").strip() == PaperStatus.PENDING_SUBMISSION.value


SCORE_FIELDS = (
    "scoreOriginality",
    "scoreClarity",
    "scoreRelevance",
    "scoreSignificance",
    "scoreSoundness",
)


class Review(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    ReviewerId: Optional[int] = None
    Status: Optional[str] = None
    Recommendation: Optional[str] = None
    Comment: Optional[str] = None
    submittedAt: Optional[datetime] = None
    scoreOriginality: Optional[float] = None
    scoreClarity: Optional[float] = None
    scoreRelevance: Optional[float] = None
    scoreSignificance: Optional[float] = None
    scoreSoundness: Optional[float] = None
    User: Optional[Participant] = None

    @property
    def is_submitted(self) -> bool:
        return self.submittedAt is not None

    def mean_score(self) -> float:
        # 缺失的分项按 0 计，仍除以 5
        values = [getattr(self, name) or 0 for name in SCORE_FIELDS]
        return sum(values) / len(SCORE_FIELDS)


class Track(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: Optional[str] = None


class ConferenceRef(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    Tracks: List[Track] = Field(default_factory=list)


class Paper(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | int
    Title: str = ""
    Abstract: str = ""
    Keywords: List[str] = Field(default_factory=list)
    Status: Optional[str] = None
    AuthorOrder: Optional[List[int]] = None
    Authors: List[Participant] = Field(default_factory=list)
    ReviewerOrder: Optional[List[int]] = None
    Reviews: List[Review] = Field(default_factory=list)
    TrackId: Optional[int] = None
    Conference: Optional[ConferenceRef] = None
    JournalId: Optional[int] = None
    originalPaperId: Optional[str | int] = None
    version: Optional[int] = None
    revisions: List["Paper"] = Field(default_factory=list)

    @property
    def is_editable(self) -> bool:
        return is_editable_status(self.Status)

    @property
    def current_status(self) -> Optional[str]:
        # revisions[0] 是最新一轮
        if self.revisions:
            return self.revisions[0].Status
        return self.Status

    @property
    def can_submit_revision(self) -> bool:
        return self.current_status == PaperStatus.REVISION_REQUIRED.value

    @property
    def reviewers(self) -> List[Participant]:
        return [review.User for review in self.Reviews if review.User is not None]

    @property
    def requires_track(self) -> bool:
        return bool(self.Conference and self.Conference.Tracks)


Paper.model_rebuild()
