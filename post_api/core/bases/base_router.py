from typing import Any, Callable, List, Optional, Type
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from post_api.core import exceptions
from post_api.core.bases.base_repository import RepositoryError
from post_api.core.bases.base_service import BaseService
from post_api.core.response.handlers import (
    list_response,
    repository_error_response,
    service_error_response,
    success_response,
)


class BaseRouter:
    """Base router class with automatic CRUD endpoints."""

    def __init__(
        self,
        service_factory: Callable[[], BaseService],
        tags: Optional[List[str]] = None,
        prefix: str = "",
        create_schema: Optional[Type[BaseModel]] = None,
        update_schema: Optional[Type[BaseModel]] = None,
        read_schema: Optional[Type[BaseModel]] = None,
        dependencies: Optional[List[Callable]] = None
    ):
        self.service_factory = service_factory
        self.tags = tags or [self.__class__.__name__.replace("Router", "")]
        self.prefix = prefix
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.read_schema = read_schema

        # Create router
        self.router = APIRouter(
            prefix=self.prefix,
            tags=self.tags,  # type:ignore
            dependencies=[Depends(dep) for dep in dependencies or []]
        )

        # Register routes
        self._register_routes()

    def _serialize(self, item: Any) -> Any:
        """Render an entity through the read schema when one is set."""
        if self.read_schema is not None:
            return jsonable_encoder(self.read_schema.model_validate(item, from_attributes=True))
        return jsonable_encoder(item)

    def _register_routes(self) -> None:
        """Register all CRUD routes."""
        self._register_list()
        self._register_create()
        self._register_get_by_id()
        self._register_update()
        self._register_remove()

    def _register_get_by_id(self) -> None:
        """Register GET /{item_id} route."""
        @self.router.get(
            "/{item_id}",
            summary="Get item by ID",
            responses={
                200: {"description": "Item retrieved successfully"},
                404: {"description": "Item not found"},
                500: {"description": "Internal server error"}
            }
        )
        async def get_by_id(
            item_id: UUID,
            service: BaseService = Depends(self.service_factory),
        ):
            try:
                item = await service.find_one(item_id)
                return success_response(
                    data=self._serialize(item),
                    message="Item retrieved successfully"
                )
            except exceptions.ServiceException as e:
                return service_error_response(e)
            except RepositoryError as e:
                return repository_error_response(e)

    def _register_list(self) -> None:
        """Register GET / route."""
        @self.router.get(
            "/",
            summary="List items",
            responses={
                200: {"description": "Items retrieved successfully"},
                500: {"description": "Internal server error"}
            }
        )
        async def list_items(service: BaseService = Depends(self.service_factory)):
            try:
                items = await service.find_all()
                return list_response(
                    items=[self._serialize(item) for item in items],
                    message="Items retrieved successfully"
                )
            except exceptions.ServiceException as e:
                return service_error_response(e)
            except RepositoryError as e:
                return repository_error_response(e)

    def _register_create(self) -> None:
        """Register POST / route."""
        if not self.create_schema:
            return

        @self.router.post(
            "/",
            status_code=status.HTTP_201_CREATED,
            summary="Create new item",
            responses={
                201: {"description": "Item created successfully"},
                422: {"description": "Validation error"},
                500: {"description": "Internal server error"}
            }
        )
        async def create_item(
            item_data: self.create_schema,  # type: ignore
            service: BaseService = Depends(self.service_factory),
        ):
            try:
                item = await service.create(item_data)
                return success_response(
                    data=self._serialize(item),
                    message="Item created successfully",
                    status_code=status.HTTP_201_CREATED
                )
            except exceptions.ServiceException as e:
                return service_error_response(e)
            except RepositoryError as e:
                return repository_error_response(e)

    def _register_update(self) -> None:
        """Register PATCH /{item_id} route."""
        if not self.update_schema:
            return

        @self.router.patch(
            "/{item_id}",
            summary="Update item",
            responses={
                200: {"description": "Item updated successfully"},
                404: {"description": "Item not found"},
                422: {"description": "Validation error"},
                500: {"description": "Internal server error"}
            }
        )
        async def update_item(
            item_id: UUID,
            item_data: self.update_schema,  # type: ignore
            service: BaseService = Depends(self.service_factory),
        ):
            try:
                item = await service.update(item_id, item_data)
                return success_response(
                    data=self._serialize(item),
                    message="Item updated successfully"
                )
            except exceptions.ServiceException as e:
                return service_error_response(e)
            except RepositoryError as e:
                return repository_error_response(e)

    def _register_remove(self) -> None:
        """Register DELETE /{item_id} route (soft delete)."""
        @self.router.delete(
            "/{item_id}",
            summary="Soft delete item",
            responses={
                200: {"description": "Item soft deleted successfully"},
                404: {"description": "Item not found"},
                500: {"description": "Internal server error"}
            }
        )
        async def remove_item(
            item_id: UUID,
            service: BaseService = Depends(self.service_factory),
        ):
            try:
                result = await service.remove(item_id)
                return success_response(
                    data=result.model_dump(),
                    message="Item soft deleted successfully"
                )
            except exceptions.ServiceException as e:
                return service_error_response(e)
            except RepositoryError as e:
                return repository_error_response(e)

    def get_router(self) -> APIRouter:
        """Get the FastAPI router instance."""
        return self.router
