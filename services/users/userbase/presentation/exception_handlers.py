import userbase.domain.exceptions as domexc
import userbase.presentation.schemas as schemas
from userbase.common.exceptions import format_exception_string
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger('userbase')


def error_response(status: int, detail: str, errors: dict[str, list[str]] | None = None) -> JSONResponse:
    body = schemas.ErrorEnvelope(detail=detail, errors=errors)
    return JSONResponse(body.model_dump(), status_code=status)


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(domexc.BaseUserException)
    async def user_exception_handler(request, exc: domexc.BaseUserException):
        mapping = {
            domexc.UserValidationError: 422,
            domexc.EmptyPasswordError: 422,
            domexc.UserDoesNotExist: 404,
            domexc.UserAlreadyExists: 409,
            domexc.UserIntegrityError: 409,
        }
        status = mapping.get(type(exc), 500)
        errors = exc.errors if isinstance(exc, domexc.UserValidationError) else None
        return error_response(status, str(exc), errors)


    @app.exception_handler(domexc.PasswordHashingError)
    async def hashing_exception_handler(request, exc: domexc.PasswordHashingError):
        #Library/environment failure: log everything, tell the client nothing
        logger.error(format_exception_string(exc, source="HASHER", comment=f"{request.method} {request.url.path}"))
        return error_response(500, "Internal server error")


    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request, exc: RequestValidationError):
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            loc = error.get("loc") or ("body",)
            field = str(loc[-1]) if len(loc) > 1 else str(loc[0])
            errors.setdefault(field, []).append(error.get("msg", "invalid value"))
        return error_response(422, "Request validation failed", errors)
