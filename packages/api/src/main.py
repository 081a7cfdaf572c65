# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .core.config import settings
from .routes import admin, clients, health, me, proposals, roles, teams, users
from .schemas.error import ErrorResponse
from .services.permissions import init_permission_resolver
from .services.store import init_document_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    store = init_document_store()
    init_permission_resolver(settings, store)
    if settings.AUTH_DISABLED:
        logger.warning("AUTH_DISABLED is set: every request runs as the dev admin user")
    yield


app = FastAPI(
    title="Credit Back-office API",
    description="Role, permission and data scope resolution for the credit back-office",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id", str(uuid.uuid4()))


def _problem(request: Request, status_code: int, detail: str, headers=None) -> JSONResponse:
    body = ErrorResponse.for_status(status_code, detail, _request_id(request), request.url.path)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        media_type="application/problem+json",
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    return _problem(request, exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    return _problem(request, 422, str(exc.errors()))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _problem(request, 500, "An unexpected error occurred.")


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(me.router, prefix="/api", tags=["me"])
app.include_router(clients.router, prefix="/api/clients", tags=["clients"])
app.include_router(proposals.router, prefix="/api", tags=["proposals"])
app.include_router(roles.router, prefix="/api/roles", tags=["roles"])
app.include_router(teams.router, prefix="/api/teams", tags=["teams"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the Credit Back-office API"}
