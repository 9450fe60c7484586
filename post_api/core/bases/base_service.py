import logging
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel
from sqlmodel import SQLModel

from post_api.core.bases.base_repository import BaseRepository
from post_api.core.exceptions import NotFoundException
from post_api.core.response.schemas import DeleteResult

T = TypeVar("T", bound=SQLModel)


class BaseService(Generic[T]):
    """Base service with create / read / update / soft delete operations.

    Each operation logs its result at DEBUG level, or logs the error at
    DEBUG level and re-raises it untouched.  Nothing is retried or
    translated here; mapping errors to responses is the router's job.
    """

    def __init__(
        self,
        repository: BaseRepository[T],
        logger: Optional[logging.Logger] = None,
    ):
        self.repository = repository
        self.logger = logger or logging.getLogger(
            f"{__name__}.{self.__class__.__name__}"
        )

    @property
    def entity_name(self) -> str:
        return self.repository.model.__name__

    @staticmethod
    def _to_dict(data: Union[Dict[str, Any], BaseModel]) -> Dict[str, Any]:
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True)
        return dict(data)

    def _parse_id(self, item_id: Any) -> Any:
        """Normalise a caller supplied id; one that can never match is NotFound."""
        parse_id = getattr(self.repository.model, "parse_id", None)
        if parse_id is None:
            return item_id
        try:
            return parse_id(item_id)
        except ValueError:
            raise NotFoundException(self.entity_name, item_id)

    async def _get_or_raise(self, item_id: Any) -> T:
        item = await self.repository.find_one(id=self._parse_id(item_id))
        if item is None:
            raise NotFoundException(self.entity_name, item_id)
        return item

    # ----------------- Hooks ----------------- #
    async def _validate_create(self, create_data: Dict[str, Any]) -> None:
        """Validate data before creation."""
        pass

    async def _validate_update(
        self, item_id: Any, update_data: Dict[str, Any], existing_item: T
    ) -> None:
        """Validate data before update."""
        pass

    async def _validate_delete(self, item_id: Any, existing_item: T) -> None:
        """Validate before soft delete."""
        pass

    # ----------------- CRUD ----------------- #
    async def create(self, data: Union[Dict[str, Any], BaseModel]) -> T:
        try:
            create_data = self._to_dict(data)
            await self._validate_create(create_data)
            entity = self.repository.model.model_validate(create_data)
            result = await self.repository.save(entity)
            self.logger.debug("create %s: %r", self.entity_name, result)
            return result
        except Exception as error:
            self.logger.debug("create %s failed: %r", self.entity_name, error)
            raise

    async def find_all(self) -> List[T]:
        try:
            items = await self.repository.find()
            self.logger.debug("find_all %s: %r", self.entity_name, items)
            return items
        except Exception as error:
            self.logger.debug("find_all %s failed: %r", self.entity_name, error)
            raise

    async def find_one(self, item_id: Any) -> T:
        try:
            item = await self._get_or_raise(item_id)
            self.logger.debug("find_one %s: %r", self.entity_name, item)
            return item
        except Exception as error:
            self.logger.debug("find_one %s failed: %r", self.entity_name, error)
            raise

    async def update(self, item_id: Any, data: Union[Dict[str, Any], BaseModel]) -> T:
        """Merge the given fields over the stored entity and save it.

        Fields that are missing or None in ``data`` keep their current
        value, and the id is never overwritten.
        """
        try:
            item = await self._get_or_raise(item_id)
            self.logger.debug("update %s, current: %r", self.entity_name, item)

            update_data = {
                key: value
                for key, value in self._to_dict(data).items()
                if value is not None and key != "id"
            }
            await self._validate_update(item_id, update_data, item)

            item.sqlmodel_update(update_data)
            result = await self.repository.save(item)
            self.logger.debug("update %s: %r", self.entity_name, result)
            return result
        except Exception as error:
            self.logger.debug("update %s failed: %r", self.entity_name, error)
            raise

    async def remove(self, item_id: Any) -> DeleteResult:
        try:
            item = await self._get_or_raise(item_id)
            self.logger.debug("remove %s, current: %r", self.entity_name, item)
            await self._validate_delete(item_id, item)

            result = await self.repository.soft_delete(id=item.id)
            self.logger.debug("remove %s: %r", self.entity_name, result)
            return result
        except Exception as error:
            self.logger.debug("remove %s failed: %r", self.entity_name, error)
            raise
