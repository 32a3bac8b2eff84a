from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Participant(BaseModel):
    """门户用户（作者 / 审稿人共用），未知字段原样保留。"""

    model_config = ConfigDict(extra="allow")

    id: int
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    organisation: Optional[str] = None
    country: Optional[str] = None
    role: List[str] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.firstname or ''} {self.lastname or ''}".strip()
