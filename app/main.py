# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# Builds the FileNest FastAPI app: lifespan (storage root + user table),
# CORS, error rendering, and the auth / fs / health routers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import get_path_mediator, get_user_store
from app.exceptions import (
    FileNestException,
    filenest_exception_handler,
    validation_exception_handler,
)
from app.routers import fs, health
from app.auth import routes as auth_routes

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the storage root and user table; close the store on exit."""
    logger.info(f"Starting FileNest API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    # Resolve through the dependency overrides so tests can swap them
    paths = app.dependency_overrides.get(get_path_mediator, get_path_mediator)()
    store = app.dependency_overrides.get(get_user_store, get_user_store)()

    paths.storage_root.mkdir(parents=True, exist_ok=True)
    logger.info(f"Storage root: {paths.storage_root}")

    store.create_tables()
    logger.info(f"User database: {store.path}")

    yield

    logger.info("Shutting down FileNest API")
    store.close()


app = FastAPI(
    title="FileNest API",
    description="""
## Personal File Storage API

Each account gets a private directory tree on the server.

### Quick Start

```bash
# 1. Register
curl -X POST http://localhost:8000/api/v1/auth/register \\
  -H "Content-Type: application/json" \\
  -d '{"username": "alice123", "password": "longpassword"}'

# 2. List your root directory
curl -X POST http://localhost:8000/api/v1/fs/list \\
  -H "Authorization: Bearer <access_token>" \\
  -H "Content-Type: application/json" \\
  -d '{"path": ""}'
```
""",
    version=health.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Register, log in and inspect tokens",
        },
        {
            "name": "Filesystem",
            "description": "Browse and manage your storage directory",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# Browsers may call the API from any origin outside production
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(FileNestException)
async def handle_filenest_exception(request: Request, exc: FileNestException):
    """Render domain errors with their own status code."""
    return await filenest_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Anything unhandled becomes an opaque 500; details stay in the log."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

app.include_router(
    fs.router,
    prefix="/api/v1/fs",
    tags=["Filesystem"]
)

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Service name, version and where to look next."""
    return {
        "name": "FileNest API",
        "version": health.VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
