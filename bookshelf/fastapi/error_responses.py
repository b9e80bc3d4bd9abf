# (c) Nelen & Schuurmans

import logging

from fastapi.encoders import jsonable_encoder
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from starlette import status

from bookshelf.base.domain import AlreadyExists
from bookshelf.base.domain import BadRequest
from bookshelf.base.domain import Conflict
from bookshelf.base.domain import DoesNotExist
from bookshelf.base.domain import ValueObject

logger = logging.getLogger(__name__)

__all__ = [
    "ValidationErrorResponse",
    "DefaultErrorResponse",
    "not_found_handler",
    "conflict_handler",
    "already_exists_handler",
    "validation_error_handler",
    "internal_error_handler",
]


class ValidationErrorEntry(ValueObject):
    loc: list[str | int]
    msg: str
    type: str


class ValidationErrorResponse(ValueObject):
    message: str
    detail: list[ValidationErrorEntry]


class DefaultErrorResponse(ValueObject):
    message: str
    detail: str | None


async def not_found_handler(request: Request, exc: DoesNotExist) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "message": f"Could not find {exc.name}{' with id=' + str(exc.id) if exc.id is not None else ''}"
        },
    )


async def conflict_handler(request: Request, exc: Conflict) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "message": "Conflict",
            "detail": jsonable_encoder(exc.args[0] if exc.args else None),
        },
    )


async def already_exists_handler(
    request: Request, exc: AlreadyExists
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"message": "Already exists", "detail": str(exc)},
    )


async def validation_error_handler(request: Request, exc: BadRequest) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationErrorResponse(
            message="Validation error", detail=exc.errors()  # type: ignore
        ).model_dump(mode="json"),
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"unhandled error: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error", "detail": None},
    )
