# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Portfolio API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 4000
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.auth import routes as auth_routes
from app.auth.tokens import TokenService
from app.config import Settings, get_settings
from app.exceptions import (
    PayloadTooLargeError,
    error_response,
    normalize_error,
    register_exception_handlers,
)
from app.routers import blogs, categories, experiences, health, projects, uploads
from core.database import Database
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)

API_TITLE = "Portfolio API"
API_VERSION = "1.0.0"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Create missing tables (when DB_CREATE_TABLES is set)
    - Shutdown: Dispose of the database engine
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # Startup
    logger.info(f"Starting {API_TITLE} in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    if settings.DB_CREATE_TABLES:
        await database.create_all()

    yield

    # Shutdown
    logger.info(f"Shutting down {API_TITLE}")
    await database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application from a Settings object.

    The token service, storage service and database handle are created here
    once and stored on app.state; request handlers reach them through the
    dependencies in app.dependencies and app.auth.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=API_TITLE,
        description="""
## Portfolio CMS API

Public read endpoints and admin-only write endpoints for a personal
portfolio site: projects, blog posts, blog categories and work experience,
plus image uploads to Supabase Storage.

### Authentication

`POST /api/auth/login` with the admin email and password returns a token.
Send it as `Authorization: Bearer <token>` on every POST, PATCH and DELETE.

### Errors

Every error has the same shape:

```json
{"error": {"code": "BAD_REQUEST", "message": "title is required"}}
```
""",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Admin login and token checks"},
            {"name": "Projects", "description": "Portfolio projects"},
            {"name": "Experiences", "description": "Work experience entries"},
            {"name": "Categories", "description": "Blog categories"},
            {"name": "Blogs", "description": "Blog posts"},
            {"name": "Uploads", "description": "Image uploads to object storage"},
            {"name": "Health", "description": "API health check"},
        ],
    )

    app.state.settings = settings
    app.state.database = Database.from_settings(settings)
    app.state.tokens = TokenService.from_settings(settings)
    app.state.storage = StorageService.from_settings(settings)

    # =========================================================================
    # Middleware
    # =========================================================================

    async def limit_body_size(request: Request, call_next):
        """Reject requests whose declared Content-Length is over the limit."""
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > settings.max_body_size_bytes:
                logger.warning(f"Rejected {request.method} {request.url.path}: body of {content_length} bytes")
                return error_response(normalize_error(PayloadTooLargeError()))
        return await call_next(request)

    app.middleware("http")(limit_body_size)

    # CORS middleware - allows cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routers
    # =========================================================================

    # Health check (unprefixed)
    app.include_router(health.router, tags=["Health"])

    app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
    app.include_router(experiences.router, prefix="/api/experiences", tags=["Experiences"])
    app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
    app.include_router(blogs.router, prefix="/api/blogs", tags=["Blogs"])
    app.include_router(uploads.router, prefix="/api/uploads", tags=["Uploads"])

    # =========================================================================
    # Root Endpoint
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": API_TITLE,
            "version": API_VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
