"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic Create, Read, Update, Delete operations and invokes the
entity pre-save hooks right before each insert/update flush.

Usage:
    class TeamRepository(BaseRepository[Team]):
        def __init__(self) -> None:
            super().__init__(Team)
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from teamroster.database import Base

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: int,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다. 없으면 None (예외 아님).

        Retrieve a single record by its identifier. Absence is reported as
        None, not as an exception.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드 ID (Identifier of the record)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        return await db.get(self.model, record_id)

    async def get_all(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """조건에 맞는 모든 레코드를 조회합니다.

        Retrieve all records matching the given equality filters.
        None values in filters are skipped.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 추가 필터 딕셔너리 {'컬럼명': 값} (Filter dict)
            order_by: 정렬 기준 컬럼, 기본 id (Column to order by, default id)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (List of matching records)
        """
        query: Select = select(self.model)

        # 동적 필터 적용 — Dynamic filter application
        if filters:
            for column_name, value in filters.items():
                if hasattr(self.model, column_name) and value is not None:
                    query = query.where(getattr(self.model, column_name) == value)

        query = query.order_by(order_by if order_by is not None else self.model.id)
        result = await db.execute(query)
        return result.scalars().all()

    async def save(
        self,
        db: AsyncSession,
        db_obj: ModelType,
    ) -> ModelType:
        """엔티티를 저장합니다. INSERT 직전에 pre_persist 훅을 호출.

        Persist a new entity. Calls its pre_persist hook right before the
        insert is flushed.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            db_obj: 저장할 엔티티 (Transient entity to insert)

        Returns:
            ModelType: 식별자가 할당된 엔티티 (Entity with generated id)
        """
        if hasattr(db_obj, "pre_persist"):
            db_obj.pre_persist()
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def save_all(
        self,
        db: AsyncSession,
        db_objs: Sequence[ModelType],
    ) -> list[ModelType]:
        """여러 엔티티를 한 번의 flush로 저장합니다.

        Persist several entities with a single flush.
        """
        for db_obj in db_objs:
            if hasattr(db_obj, "pre_persist"):
                db_obj.pre_persist()
            db.add(db_obj)
        await db.flush()
        return list(db_objs)

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """딕셔너리 데이터로 새 레코드를 생성합니다.

        Create a new record from a data dictionary.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 (Column values for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)
        """
        return await self.save(db, self.model(**obj_data))

    async def update(
        self,
        db: AsyncSession,
        record_id: int,
        update_data: dict[str, Any],
    ) -> ModelType | None:
        """기존 레코드를 업데이트합니다. UPDATE 직전에 pre_update 훅을 호출.

        Update an existing record. Calls its pre_update hook right before
        the update is flushed.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 업데이트할 레코드 ID (Identifier of the record)
            update_data: 업데이트할 필드와 값 (Fields and values to update)

        Returns:
            ModelType | None: 업데이트된 레코드 또는 None (Updated record or None)
        """
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return None

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        if hasattr(db_obj, "pre_update"):
            db_obj.pre_update()
        await db.flush()
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        record_id: int,
    ) -> bool:
        """레코드를 삭제합니다.

        Delete a record by its identifier.

        Returns:
            bool: 삭제 성공 여부 (Whether the record existed and was deleted)
        """
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return False

        await db.delete(db_obj)
        await db.flush()
        return True

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching the given equality filters exists.
        """
        return await self.count(db, filters) > 0

    async def count(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
    ) -> int:
        """조건에 일치하는 레코드 수 — Count records matching the filters."""
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in (filters or {}).items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)

        return (await db.execute(query)).scalar() or 0
