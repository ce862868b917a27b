import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from accounthub.shared.errors import AppError

logger = logging.getLogger(__name__)


def fail(message: str, status: int = 400, errors: Optional[Any] = None) -> JSONResponse:
    body: dict = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=status, content=body)


async def _app_error(request: Request, exc: AppError):
    logger.debug("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return fail(exc.message, status=exc.status_code)


async def _validation_error(request: Request, exc: RequestValidationError):
    return fail("Validation failed", status=400, errors=jsonable_encoder(exc.errors()))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
