"""회원 관련 Pydantic 요청/응답 스키마 정의.

Member Pydantic request/response schema definitions.
Includes the search condition (sparse filter) and the member + team
projection rows returned by the dynamic search.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class MemberSearchCondition(BaseModel):
    """회원 검색 조건 — 모든 필드 선택 사항.

    Member search condition. Every field is optional; an absent (or blank)
    field adds no constraint rather than matching empty values.

    Attributes:
        username: 회원 이름 일치 (Username equals)
        team_name: 팀 이름 일치 (Team name equals)
        age_goe: 나이 하한, 포함 (Age greater or equal)
        age_loe: 나이 상한, 포함 (Age less or equal)
    """

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = None
    age_loe: int | None = None


class MemberTeamRow(BaseModel):
    """회원 + 팀 프로젝션 행.

    Member + team projection row. team_id / team_name are None for
    members without a team (left outer join).
    """

    member_id: int
    username: str | None
    age: int
    team_id: int | None = None
    team_name: str | None = None


class MemberDto(BaseModel):
    """회원 DTO — id, 이름, 팀 이름 (Inner-join projection)."""

    id: int
    username: str | None
    team_name: str


class MemberCreate(BaseModel):
    """회원 생성 요청 스키마.

    Member creation request schema.

    Attributes:
        username: 회원 이름 (Username, optional)
        age: 나이 (Age, non-negative)
        team_id: 소속 팀 ID (Team identifier, optional)
    """

    username: str | None = None
    age: int = Field(default=0, ge=0)
    team_id: int | None = None


class MemberUpdate(BaseModel):
    """회원 수정 요청 스키마 (부분 업데이트).

    Member update request schema (partial update).
    """

    username: str | None = None
    age: int | None = Field(default=None, ge=0)
    team_id: int | None = None


class MemberResponse(BaseModel):
    """회원 응답 스키마.

    Member response schema.
    """

    id: int
    username: str | None
    age: int
    team_id: int | None
    team_name: str | None
    created_at: datetime | None
    updated_at: datetime | None


class BulkAgePlusRequest(BaseModel):
    """일괄 나이 증가 요청 — age 이상인 회원의 나이를 1 증가."""

    age: int


class BulkAgePlusResponse(BaseModel):
    """일괄 나이 증가 결과 — Number of updated rows."""

    updated: int


class AgeStatistics(BaseModel):
    """나이 집계 — count, sum, avg, max, min (empty table → zeros/None)."""

    count: int
    sum: int | None
    avg: float | None
    max: int | None
    min: int | None
