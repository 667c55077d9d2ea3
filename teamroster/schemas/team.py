"""팀 관련 Pydantic 요청/응답 스키마 정의.

Team Pydantic request/response schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class TeamCreate(BaseModel):
    """팀 생성 요청 스키마.

    Attributes:
        name: 팀 이름, 조직 내 고유 (Unique team name)
    """

    name: str = Field(..., min_length=1, max_length=100)


class TeamResponse(BaseModel):
    """팀 응답 스키마 — Team response schema."""

    id: int
    name: str
    created_at: datetime | None


class TeamMemberItem(BaseModel):
    """팀 상세의 소속 회원 항목 — Member entry inside team detail."""

    id: int
    username: str | None
    age: int


class TeamDetailResponse(TeamResponse):
    """팀 상세 응답 — 소속 회원 목록 포함 (id 순).

    Team detail with its members ordered by id.
    """

    members: list[TeamMemberItem] = Field(default_factory=list)


class TeamAgeAverage(BaseModel):
    """팀별 평균 나이 — Average member age per team."""

    team_name: str
    average_age: float
