"""팀 SQLAlchemy ORM 모델 정의.

Team SQLAlchemy ORM model definition.

Tables:
    - teams: 회원이 소속되는 팀 (Team that members belong to)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamroster.database import Base
from teamroster.models.base_entity import TimestampMixin


class Team(TimestampMixin, Base):
    """팀 모델 — 회원의 다대일 참조 대상.

    Team model — Target of the member many-to-one reference.
    The members collection is a read-side back-reference for display;
    the foreign key lives on members.team_id.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        name: 팀 이름 (Unique team name)

    Relationships:
        members: 소속 회원 목록, id 순 (Members of this team ordered by id)
    """

    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    members = relationship("Member", back_populates="team", order_by="Member.id")

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name!r})"
