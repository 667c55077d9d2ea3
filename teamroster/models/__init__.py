"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the SQLAlchemy
metadata, which is required for relationship resolution and create_all.

Modules:
    base_entity: 생성/수정 일시 믹스인 (Timestamp mixin with pre-save hooks)
    team: 팀 (Team)
    member: 회원 (Member)
"""

from teamroster.models.base_entity import TimestampMixin
from teamroster.models.team import Team
from teamroster.models.member import Member

__all__ = ["TimestampMixin", "Team", "Member"]
