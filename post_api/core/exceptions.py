from typing import Any, List, Optional

from fastapi import HTTPException, status

from post_api.core.response.schemas import ErrorDetail


class ServiceException(HTTPException):
    """Base exception raised from the service layer."""

    error_code: str = "SERVICE_ERROR"

    def __init__(
        self,
        detail: str = "Service error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_details: Optional[List[ErrorDetail]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.error_details = error_details or []


class NotFoundException(ServiceException):
    """No entity of the given kind matches the given id."""

    error_code = "NOT_FOUND"

    def __init__(self, entity: str, item_id: Any):
        self.entity = entity
        self.item_id = item_id
        super().__init__(
            detail=f'Could not find any entity of type "{entity}" matching: {item_id}',
            status_code=status.HTTP_404_NOT_FOUND,
            error_details=[
                ErrorDetail(
                    field="id",
                    code="NOT_FOUND",
                    message=f"{entity} not found",
                    target=str(item_id),
                )
            ],
        )

