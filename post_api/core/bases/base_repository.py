from typing import Any, AsyncContextManager, Callable, Generic, List, Optional, Type, TypeVar

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from post_api.core.config import settings
from post_api.core.response.schemas import DeleteResult

T = TypeVar("T", bound=SQLModel)


class RepositoryError(Exception):
    """Custom exception for repository errors."""

    pass


class BaseRepository(Generic[T]):
    model: Type[T]

    def __init__(self, get_session: Callable[[], AsyncContextManager[AsyncSession]]):
        self.get_session = get_session

    def _handle_db_error(self, error: SQLAlchemyError, operation: str) -> None:
        """Handle database errors and raise appropriate exceptions."""
        if isinstance(error, IntegrityError):
            raise RepositoryError(
                f"Database integrity error during {operation}: {error}"
            ) from error
        else:
            raise RepositoryError(
                f"Database error during {operation}: {error}"
            ) from error

    def _build_select_stmt(self, include_deleted: bool = False, **criteria) -> Any:
        """Build select statement with equality filters and soft delete scope."""
        stmt = select(self.model)

        # Soft deleted rows are out of scope unless asked for
        if not include_deleted and hasattr(self.model, "deleted_at"):
            stmt = stmt.where(self.model.deleted_at.is_(None))  # type: ignore

        for field, value in criteria.items():
            if not hasattr(self.model, field):
                raise RepositoryError(
                    f"Unknown field '{field}' for {self.model.__name__}"
                )
            stmt = stmt.where(getattr(self.model, field) == value)

        return stmt

    # ----------------- READ ----------------- #
    async def find(self, include_deleted: bool = False) -> List[T]:  # type:ignore
        """Return every row in scope as a list."""
        async with self.get_session() as db:
            try:
                stmt = self._build_select_stmt(include_deleted=include_deleted)
                result = await db.exec(stmt)
                return list(result.all())
            except SQLAlchemyError as e:
                self._handle_db_error(e, "find")

    async def find_one(self, include_deleted: bool = False, **criteria) -> Optional[T]:
        """Return the first row matching the criteria, or None."""
        async with self.get_session() as db:
            try:
                stmt = self._build_select_stmt(
                    include_deleted=include_deleted, **criteria
                )
                result = await db.exec(stmt)
                return result.first()
            except SQLAlchemyError as e:
                self._handle_db_error(e, "find_one")

    # ----------------- WRITE ----------------- #
    async def save(self, entity: T) -> T:  # type:ignore
        """Insert the entity, or update it when a row with its id exists."""
        assign_id = getattr(entity, "assign_id", None)
        if callable(assign_id):
            assign_id()

        async with self.get_session() as db:
            try:
                obj = await db.merge(entity)
                await db.commit()
                await db.refresh(obj)
                return obj
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "save")

    async def soft_delete(self, **criteria) -> DeleteResult:  # type:ignore
        """Flag matching active rows as deleted instead of removing them."""
        if not hasattr(self.model, "deleted_at"):
            raise AttributeError("Model must have 'deleted_at' field for soft delete")

        async with self.get_session() as db:
            try:
                stmt = self._build_select_stmt(include_deleted=False, **criteria)
                result = await db.exec(stmt)
                rows = result.all()

                now = settings.get_now()
                for row in rows:
                    setattr(row, "deleted_at", now)

                await db.commit()
                return DeleteResult(affected=len(rows))
            except SQLAlchemyError as e:
                await db.rollback()
                self._handle_db_error(e, "soft_delete")
