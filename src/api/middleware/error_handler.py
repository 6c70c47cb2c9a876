"""
Error handling for the API

Converts exceptions raised while handling a request into the
ErrorResponse envelope:
- Validation errors (bad request body) -> 422
- Domain errors (entry not found, runtime not ready) -> their status code
- Anything else -> 500
"""

import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas.error import ErrorResponse, ErrorDetail, ValidationErrorResponse
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class EntryNotFoundError(DomainError):
    """Entry index outside the live buffer list"""
    def __init__(self, index: int, entry_count: int):
        super().__init__(
            code="ENTRY_NOT_FOUND",
            message=f"Entry {index} not found",
            details={"index": index, "entry_count": entry_count},
            status_code=404
        )


class RuntimeUnavailableError(DomainError):
    """Event loop is not running, events would never be processed"""
    def __init__(self):
        super().__init__(
            code="RUNTIME_UNAVAILABLE",
            message="Editor runtime is not running",
            status_code=503
        )


def _error_json(status_code: int, response) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(response))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (bad JSON structure)"""
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(f"Validation error ({request_id})", path=request.url.path, errors=len(errors))

        validation_errors = []
        for error in errors:
            field = ".".join(str(x) for x in error["loc"][1:])  # Skip "body"
            validation_errors.append({
                "field": field,
                "message": error["msg"],
                "type": error["type"]
            })

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)},
            ),
            validation_errors=validation_errors,
            request_id=request_id
        )
        return _error_json(422, response)

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        """Handle domain-specific errors"""
        request_id = str(uuid.uuid4())

        log.warn(f"Domain error ({request_id}): {exc.code} - {exc.message}")

        response = ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
            request_id=request_id
        )
        return _error_json(exc.status_code, response)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors"""
        request_id = str(uuid.uuid4())

        log.error(
            f"Unexpected error ({request_id}): {type(exc).__name__}: {exc}",
            path=request.url.path
        )

        response = ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred. Please try again.",
                details={"request_id": request_id},
            ),
            request_id=request_id
        )
        return _error_json(status.HTTP_500_INTERNAL_SERVER_ERROR, response)
