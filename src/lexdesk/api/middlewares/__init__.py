"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.lexdesk.core.config import Settings

from .logging_context import logging_context_middleware

__all__ = [
    "setup_middlewares",
    "logging_context_middleware",
]

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
CORS_HEADERS = ["Authorization", "Content-Type", "X-Request-ID"]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Install middlewares, innermost first.

    Starlette wraps each added middleware around the previous ones, so
    ``CorrelationIdMiddleware`` runs first and the request ID already exists
    when the logging context is bound.
    """
    app.middleware("http")(logging_context_middleware)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=CORS_METHODS,
            allow_headers=CORS_HEADERS,
            expose_headers=["X-Request-ID"],
        )

    app.add_middleware(CorrelationIdMiddleware)
