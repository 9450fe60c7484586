from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Optional
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.types import TypeDecorator
from sqlmodel import Column, DateTime, Field, SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from post_api.core.config import settings


class Database:
    def __init__(self, db_url: str, echo: bool = False):
        self.engine: AsyncEngine = create_async_engine(db_url, echo=echo, future=True)

    async def disconnect(self):
        await self.engine.dispose()

    async def create_all(self):
        """Create every table registered on the SQLModel metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def drop_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, Any]:
        async with AsyncSession(self.engine, expire_on_commit=False) as session:
            yield session


database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
get_session = database.get_session


class TZDateTime(TypeDecorator):
    """Aware datetime stored as UTC and read back in the configured time zone.

    SQLite has no timezone support, so values are written there as naive UTC.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=ZoneInfo(settings.TIME_ZONE))
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            value = value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(ZoneInfo(settings.TIME_ZONE))


class BaseModel(SQLModel):
    """Base model with common fields."""

    id: Optional[UUID] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=settings.get_now, sa_column=Column(TZDateTime(timezone=True))
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(TZDateTime(timezone=True), onupdate=settings.get_now),
    )
    deleted_at: Optional[datetime] = Field(
        default=None, sa_column=Column(TZDateTime(timezone=True), nullable=True)
    )

    @classmethod
    def parse_id(cls, value: Any) -> UUID:
        """Turn an id in any accepted form (UUID or its string) into a UUID.

        Raises ValueError when the value cannot be an id of this model.
        """
        if isinstance(value, UUID):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid id: {value!r}")
        return UUID(value.strip())

    def assign_id(self) -> None:
        """Give the entity its identifier on first save."""
        if self.id is None:
            self.id = uuid4()
