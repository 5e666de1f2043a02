"""Tenant data errors and the exception handlers that expose them over HTTP."""

from typing import Final

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.lexdesk.core.logging import get_logger

logger = get_logger(__name__)

UNIQUE_VIOLATION: Final[str] = "23505"


class TenantDataError(Exception):
    """Base class for errors raised by the tenant data-access layer."""


class InvalidTenantId(TenantDataError, ValueError):
    """Tenant identifier is malformed or unsafe to use in a schema name.

    Raised before any SQL is executed.
    """


class UnresolvedPlaceholder(TenantDataError):
    """A query template still contains a ``${...}`` token after substitution."""


class NoFieldsToUpdate(TenantDataError):
    """An update was attempted with an empty partial payload."""


class RequiredFieldNull(TenantDataError):
    """An update tried to set a NOT NULL column to null."""


class QueryExecutionError(TenantDataError):
    """The database rejected or failed to run a tenant-scoped statement.

    ``sqlstate`` is the PostgreSQL error code when the driver reported one.
    """

    def __init__(self, tenant_id: str, message: str, sqlstate: str | None = None):
        super().__init__(f"Query failed in tenant {tenant_id}: {message}")
        self.tenant_id = tenant_id
        self.sqlstate = sqlstate

    @property
    def is_unique_violation(self) -> bool:
        return self.sqlstate == UNIQUE_VIOLATION


def _error_response(status_code: int, detail: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(InvalidTenantId)
    async def invalid_tenant_handler(request: Request, exc: InvalidTenantId) -> JSONResponse:
        logger.warning("Rejected tenant identifier", path=request.url.path, error=str(exc))
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid tenant identifier")

    @app.exception_handler(NoFieldsToUpdate)
    async def no_fields_handler(request: Request, exc: NoFieldsToUpdate) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequiredFieldNull)
    async def required_field_handler(request: Request, exc: RequiredFieldNull) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(QueryExecutionError)
    async def query_error_handler(request: Request, exc: QueryExecutionError) -> JSONResponse:
        logger.exception(
            "Tenant query failed",
            exc_info=exc,
            request_id=correlation_id.get(),
            path=request.url.path,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )
