from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import DependencyError, PayrollServiceError
from utils.logger import get_logger

logger = get_logger(__name__)


def error_response(exc: PayrollServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "error_code": exc.error_code},
    )


async def service_error_handler(request: Request, exc: PayrollServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"[{request.method} {request.url.path}] {exc.error_code}: {exc.message}")
    else:
        logger.info(f"[{request.method} {request.url.path}] {exc.error_code}: {exc.message}")
    return error_response(exc)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"[{request.method} {request.url.path}] Database error: {exc}")
    return error_response(DependencyError("Database operation failed"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PayrollServiceError, service_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
