from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.constants.error_codes import ErrorCode
from app.core.config import IS_PRODUCTION
from app.core.exceptions import AppException
from app.utils.logger import get_logger

logger = get_logger(__name__)

HTTP_STATUS_TO_ERROR_CODE = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.PERMISSION_DENIED,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.VALIDATION_ERROR,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION_ERROR,
}


def error_response(status_code: int, message: str, error_code: ErrorCode, details=None, headers=None):
    """Failure envelope shared by every handler."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
            "error_code": error_code,
            "details": details,
        },
        headers=headers,
    )


def _first_validation_message(errors: list[dict]) -> str:
    if not errors:
        return "Invalid request data"
    first = errors[0]
    # loc starts with "body" / "query" / "path"
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request data")
    return f"{field}: {message}" if field else message


async def app_exception_handler(request: Request, exc: AppException):
    return error_response(exc.status_code, exc.detail, exc.error_code, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return error_response(
        400,
        _first_validation_message(errors),
        ErrorCode.VALIDATION_ERROR,
        jsonable_encoder(errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(
        exc.status_code,
        exc.detail,
        HTTP_STATUS_TO_ERROR_CODE.get(exc.status_code, ErrorCode.INTERNAL_ERROR),
        headers=getattr(exc, "headers", None),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    # services translate known constraints; this catches the rest
    logger.warning(
        "Unhandled constraint violation",
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(400, "Database constraint violation", ErrorCode.CONSTRAINT_VIOLATION)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={"path": request.url.path, "method": request.method},
    )
    message = "Internal server error"
    if not IS_PRODUCTION and str(exc):
        message = str(exc)
    return error_response(500, message, ErrorCode.INTERNAL_ERROR)


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
