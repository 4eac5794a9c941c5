# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Contact Manager API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 3000
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import (
    ContactManagerException,
    contact_manager_exception_handler,
    validation_exception_handler,
)
from app.routers import contacts, health
from lib.database import Database

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(database_url: str | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database_url: Overrides settings.DATABASE_URL (tests point this at
            a throwaway SQLite file)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: Open the database and create the contacts table if absent
        - Shutdown: Close pooled connections
        """
        logger.info(f"Starting Contact Manager API in {settings.ENVIRONMENT} mode")
        logger.info(f"CORS origins: {settings.cors_origins_list}")

        database = Database(database_url or settings.DATABASE_URL, echo=settings.DEBUG)
        await database.create_tables()
        app.state.database = database

        yield

        logger.info("Shutting down Contact Manager API")
        await database.dispose()

    app = FastAPI(
        title="Contact Manager API",
        description="""
## Contact Manager API

CRUD over a single `contacts` table.

| Method | Path | Result |
|--------|------|--------|
| GET | /api/contacts | All contacts, ordered by first then last name |
| GET | /api/contacts/{id} | One contact |
| POST | /api/contacts | Create (201) |
| PUT | /api/contacts/{id} | Replace all fields |
| DELETE | /api/contacts/{id} | Delete |

Every error response has the shape `{"error": "<message>", "code": "<CODE>"}`.
""",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Contacts",
                "description": "Create, read, update and delete contacts",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(ContactManagerException, contact_manager_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(
        contacts.router,
        prefix=f"{settings.api_prefix}/contacts",
        tags=["Contacts"]
    )

    app.include_router(
        health.router,
        prefix=settings.api_prefix,
        tags=["Health"]
    )

    # =========================================================================
    # Root Endpoint
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Contact Manager API",
            "version": __version__,
            "docs": "/docs",
            "contacts": f"{settings.api_prefix}/contacts",
            "health": f"{settings.api_prefix}/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )
