import logging
from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import event, func
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.future import select
from sqlalchemy.pool import NullPool

from hrportal.core.config import settings
from hrportal.models.model import (
    AttendanceRecord,
    Base,
    Employee,
    Holiday,
    LeaveRequest,
    Notification,
    Project,
    User,
    UserSettings,
    WorkLog,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

DATABASE_URL = settings.database_url


def build_engine(url: str):
    if url.startswith("sqlite"):
        sqlite_engine = create_async_engine(url, echo=settings.SQL_ECHO, poolclass=NullPool)

        @event.listens_for(sqlite_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    return create_async_engine(
        url,
        echo=settings.SQL_ECHO,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


engine = build_engine(DATABASE_URL)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_db():
    session = async_session()
    try:
        yield session
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.error(f"DB session error: {str(e)}")
        raise
    finally:
        await session.close()


class Repository(Generic[T]):
    """Data access for one table, every call scoped to the owning user."""

    def __init__(self, model_class, default_order=None):
        self.model_class = model_class
        self.default_order = default_order

    def _scoped(self, query, owner_id: str):
        return query.where(self.model_class.user_id == owner_id)

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        if filters:
            for key, value in filters.items():
                if hasattr(self.model_class, key) and value is not None:
                    query = query.filter(getattr(self.model_class, key) == value)
        return query

    async def create(self, session: AsyncSession, owner_id: str, obj_data: Dict[str, Any]) -> T:
        db_obj = self.model_class(**obj_data, user_id=owner_id)
        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def get(self, session: AsyncSession, owner_id: str, id_value: Any) -> Optional[T]:
        result = await session.execute(
            self._scoped(select(self.model_class), owner_id)
            .where(self.model_class.id == id_value)
        )
        return result.scalars().first()

    async def get_all(
        self,
        session: AsyncSession,
        owner_id: str,
        skip: int = 0,
        limit: Optional[int] = 100,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Sequence[Any]] = None,
        conditions: Optional[Sequence[Any]] = None,
    ) -> List[T]:
        query = self._apply_filters(self._scoped(select(self.model_class), owner_id), filters)

        for condition in conditions or ():
            query = query.where(condition)

        ordering = order_by if order_by is not None else self.default_order
        if ordering is not None:
            query = query.order_by(*ordering)

        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await session.execute(query)
        return list(result.unique().scalars().all())

    async def update(self, session: AsyncSession, db_obj: T, obj_data: Dict[str, Any]) -> T:
        for key, value in obj_data.items():
            setattr(db_obj, key, value)

        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def delete(self, session: AsyncSession, db_obj: T) -> bool:
        await session.delete(db_obj)
        await session.flush()
        return True

    async def count(
        self,
        session: AsyncSession,
        owner_id: str,
        filters: Optional[Dict[str, Any]] = None,
        conditions: Optional[Sequence[Any]] = None,
    ) -> int:
        query = self._apply_filters(
            self._scoped(select(func.count(self.model_class.id)), owner_id), filters
        )
        for condition in conditions or ():
            query = query.where(condition)

        result = await session.execute(query)
        return result.scalar() or 0


async def init_db():
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables created successfully")
    except Exception as e:
        logger.error(f"Database initialization error: {str(e)}")
        raise

    logger.info("Database ready")


async def close_db():
    await engine.dispose()
    logger.info("Database connections closed")


employee_repository = Repository(Employee, default_order=[Employee.first_name, Employee.last_name])
attendance_repository = Repository(AttendanceRecord, default_order=[AttendanceRecord.date.desc(), AttendanceRecord.check_in])
leave_repository = Repository(LeaveRequest, default_order=[LeaveRequest.start_date.desc()])
holiday_repository = Repository(Holiday, default_order=[Holiday.date])
work_log_repository = Repository(WorkLog, default_order=[WorkLog.date.desc(), WorkLog.created_at.desc()])
notification_repository = Repository(Notification, default_order=[Notification.notification_date.desc()])
project_repository = Repository(Project, default_order=[Project.created_at.desc()])
settings_repository = Repository(UserSettings)


async def get_employee_count_by_department(session: AsyncSession, owner_id: str) -> List[Dict[str, Any]]:
    count_column = func.count(Employee.id).label("count")
    query = (
        select(Employee.department, count_column)
        .where(Employee.user_id == owner_id)
        .group_by(Employee.department)
        .order_by(count_column.desc(), Employee.department)
    )

    result = await session.execute(query)
    return [{"department": dept, "count": count} for dept, count in result.all()]


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalars().first()


async def get_user_by_id(session: AsyncSession, user_id: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalars().first()
