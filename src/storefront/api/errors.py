"""Map storefront error kinds onto HTTP responses.

Protean's own handlers cover ``ValidationError`` (400) and
``ObjectNotFoundError`` (404). The handlers here add the kinds that have no
Protean equivalent, and turn request body validation into a plain 400.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers

from storefront.shared.errors import ConflictError, ForbiddenError

logger = structlog.get_logger(__name__)


def _error(status_code: int, messages) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": jsonable_encoder(messages)})


async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, exc.messages)


async def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    return _error(status.HTTP_403_FORBIDDEN, exc.messages)


async def _version_conflict(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("concurrent_modification", path=request.url.path, detail=str(exc))
    return _error(status.HTTP_409_CONFLICT, {"_entity": ["The record was modified concurrently, please retry"]})


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, exc.errors())


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(ConflictError, _conflict)
    app.add_exception_handler(ForbiddenError, _forbidden)
    app.add_exception_handler(ExpectedVersionError, _version_conflict)
    app.add_exception_handler(RequestValidationError, _invalid_request)
