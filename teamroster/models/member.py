"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - members: 회원 (Member with optional team reference)
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamroster.database import Base
from teamroster.models.base_entity import TimestampMixin
from teamroster.models.team import Team


class Member(TimestampMixin, Base):
    """회원 모델 — 팀에 선택적으로 소속.

    Member model — Optionally belongs to a Team (many-to-one).

    Attributes:
        id: 고유 식별자 (Auto-increment identifier, also the default sort tie-break)
        username: 회원 이름 (Username, nullable)
        age: 나이 (Age, defaults to 0)
        team_id: 소속 팀 FK (Team foreign key, nullable; SET NULL on team delete)

    Relationships:
        team: 소속 팀 (Owning team, None when unassigned)
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )

    team = relationship("Team", back_populates="members")

    def __init__(self, username: str | None = None, age: int = 0, team: Team | None = None, **kwargs) -> None:
        super().__init__(username=username, age=age, **kwargs)
        if team is not None:
            self.change_team(team)

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경합니다.

        Move this member to another team. back_populates keeps
        team.members in sync without loading the collection.
        """
        self.team = team

    def __repr__(self) -> str:
        # 연관관계(team)는 출력하지 않음 — relationships are left out
        return f"Member(id={self.id}, username={self.username!r}, age={self.age})"
