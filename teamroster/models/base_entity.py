"""공통 엔티티 믹스인 — 생성/수정 일시와 저장 전 훅.

Common entity mixin — Creation/modification timestamps with pre-save hooks.
The hooks are plain methods; the repository layer calls them right before
an insert or update is flushed instead of relying on ORM events.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    """현재 UTC 시각 — Current timestamp in UTC."""
    return datetime.now(timezone.utc)


class TimestampMixin:
    """생성/수정 일시 컬럼을 제공하는 믹스인.

    Mixin providing created_at / updated_at columns.

    Attributes:
        created_at: 생성 일시 UTC (Creation timestamp, set once on insert)
        updated_at: 수정 일시 UTC (Last modification timestamp)
    """

    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def pre_persist(self) -> None:
        """INSERT 직전에 호출 — 생성/수정 일시를 동일한 현재 시각으로 설정.

        Called right before insert. Sets both timestamps to the same instant.
        """
        now: datetime = utcnow()
        self.created_at = now
        self.updated_at = now

    def pre_update(self) -> None:
        """UPDATE 직전에 호출 — 수정 일시만 갱신 (created_at은 변경 불가).

        Called right before update. created_at is never touched.
        """
        self.updated_at = utcnow()
