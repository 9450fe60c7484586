import logging
from typing import Any, List, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from post_api.core import exceptions
from post_api.core.bases.base_repository import RepositoryError
from post_api.core.response.schemas import BaseResponse, ErrorResponse, ListResponse

logger = logging.getLogger(__name__)


def success_response(
    data: Any = None,
    message: str = "Success",
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    body = BaseResponse[Any](success=True, message=message, data=data)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def list_response(items: List[Any], message: str = "Items retrieved successfully") -> JSONResponse:
    body = ListResponse[Any](success=True, message=message, data=items, total=len(items))
    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(body))


def error_response(
    error_code: str = "ERROR",
    message: str = "Unknown Error",
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[List[dict]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        error_code=error_code,
        error_details=details or [],
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def service_error_response(exc: exceptions.ServiceException) -> JSONResponse:
    """Map a service exception onto the error envelope."""
    return error_response(
        error_code=exc.error_code,
        message=str(exc.detail),
        status_code=exc.status_code,
        details=[detail.model_dump() for detail in exc.error_details],
    )


def repository_error_response(exc: RepositoryError) -> JSONResponse:
    return error_response(
        error_code="DATABASE_ERROR",
        message=str(exc),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort handler for anything the routers did not map."""
    if isinstance(exc, exceptions.ServiceException):
        return service_error_response(exc)
    if isinstance(exc, RepositoryError):
        return repository_error_response(exc)

    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        error_code="INTERNAL_SERVER_ERROR",
        message="Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
