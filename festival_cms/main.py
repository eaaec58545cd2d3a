"""Main FastAPI application entry point.

Serves the public festival site API, the admin CMS endpoints and the
realtime change feed.
"""

import logging
import os
import subprocess
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from festival_cms.config import get_settings
from festival_cms.db.config import SessionLocal, close_db, init_models
from festival_cms.repositories.collection_repo import (
    InvalidFieldError,
    RecordConflictError,
    RecordNotFoundError,
    StoreError,
)
from festival_cms.routers import (
    admin,
    auth,
    health,
    media,
    newsletter,
    partners,
    realtime,
    settings as settings_router,
    site,
)
from festival_cms.services.auth import AuthService
from festival_cms.store.collection_store import (
    CollectionStore,
    UnknownCollectionError,
)
from festival_cms.store.storage import ObjectStorage

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Application metadata
APP_NAME = "Festival CMS API"
DESCRIPTION = """
Festival marketing site and content management backend

## Features

* **Site**: Public read access to events, schedule, tickets, gallery and pages
* **Admin**: Authenticated CRUD, ordering and visibility for every collection
* **Settings**: Countdown and theme configuration with built-in defaults
* **Media**: Validated asset uploads served back by public URL
* **Realtime**: WebSocket change feed per collection
"""

settings = get_settings()

# Initialize FastAPI app
app = FastAPI(
    title=APP_NAME,
    description=DESCRIPTION,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS middleware configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Shared services; tests replace these on app.state
app.state.store = CollectionStore(SessionLocal)
app.state.storage = ObjectStorage(
    settings.media_root, settings.public_base_url, settings.max_upload_bytes
)
app.state.auth = AuthService(
    settings.admin_username,
    settings.admin_password_hash,
    settings.session_ttl_seconds,
)


def _error_response(request, status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": str(request.url)
        }
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions with consistent error format"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": str(request.url)
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RecordNotFoundError)
async def not_found_handler(request, exc):
    return _error_response(request, 404, str(exc))


@app.exception_handler(RecordConflictError)
async def conflict_handler(request, exc):
    return _error_response(request, 409, str(exc))


@app.exception_handler(InvalidFieldError)
@app.exception_handler(UnknownCollectionError)
async def bad_request_handler(request, exc):
    return _error_response(request, 400, str(exc))


@app.exception_handler(StoreError)
async def store_error_handler(request, exc):
    logger.error(f"Store error: {exc}", exc_info=True)
    return _error_response(request, 500, "Store operation failed")


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _error_response(request, 500, "Internal server error")


# Include routers; the CSV export must precede the generic /{record_id} route
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(auth.router, prefix="/api/v1")
app.include_router(site.router, prefix="/api/v1")
app.include_router(settings_router.router, prefix="/api/v1")
app.include_router(newsletter.router, prefix="/api/v1")
app.include_router(partners.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")
app.include_router(media.router, prefix="/api/v1")
app.include_router(realtime.router, prefix="/api/v1")


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "name": APP_NAME,
        "version": settings.app_version,
        "status": "running",
        "environment": settings.environment.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "docs": "/docs",
        "health": "/api/v1/health"
    }


def run_migrations() -> bool:
    """Apply Alembic migrations up to head; returns False on failure."""
    logger.info("AUTO_MIGRATE enabled: running 'alembic upgrade head'")
    try:
        result = subprocess.run(
            ["alembic", "upgrade", "head"],
            cwd=os.path.join(os.path.dirname(__file__), ".."),
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        logger.error("Alembic not found, ensure it's installed in the environment")
        return False
    if result.returncode != 0:
        logger.error(
            "Alembic upgrade failed (code %s): %s\n%s",
            result.returncode,
            result.stdout,
            result.stderr,
        )
        return False
    logger.info("Alembic migration applied successfully")
    return True


@app.on_event("startup")
async def startup_event():
    """Application startup tasks"""
    logger.info(f"Starting {APP_NAME} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment.value}")
    logger.info(f"CORS Origins: {settings.cors_origins}")
    if not settings.admin_password_hash:
        logger.warning("ADMIN_PASSWORD_HASH is not set; admin sign-in disabled")
    if settings.auto_migrate:
        run_migrations()
    else:
        await init_models()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown tasks"""
    logger.info(f"Shutting down {APP_NAME}")
    await close_db()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "festival_cms.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment.value == "development",
        log_level="info"
    )
