# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the marketplace web app.
# It builds the FastAPI application: session middleware, exception handlers,
# static files, and one router per resource, each handed the shared
# database handle.
#
# Usage:
#   uvicorn app.main:app --reload --port 8080
# =============================================================================

import logging
import random
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from app.auth import routes as auth_routes
from app.auth.session import RotatingKeySessionMiddleware
from app.config import Settings, get_settings
from app.exceptions import (
    MarketplaceException,
    database_exception_handler,
    marketplace_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.rendering import create_templates
from app.routers import books, conversations, favorites, health, home, items, listings
from lib.database import Database, DatabaseError

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).parent.parent / "public"


def create_database(settings: Settings) -> Database:
    """Create the shared connection pool from settings."""
    return Database(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        echo=settings.DB_ECHO,
    )


def create_app(
    settings: Settings | None = None,
    db: Database | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use (defaults to the environment)
        db: Database handle to share between routers (defaults to a new pool)
        rng: Random source for the home page featured items

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    if db is None:
        db = create_database(settings)
    templates = create_templates()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: verify the database is reachable; refuse to start otherwise
        - Shutdown: close the connection pool
        """
        logger.info(f"Starting marketplace in {settings.ENVIRONMENT} mode")
        try:
            await db.connect()
        except DatabaseError as e:
            logger.error(f"Cannot reach the database, shutting down: {e}")
            raise

        yield

        logger.info("Shutting down marketplace")
        await db.dispose()

    app = FastAPI(
        title="Marketplace",
        description="Buy and sell items: listings, favorites and buyer/seller messaging.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.db = db
    app.state.settings = settings

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        RotatingKeySessionMiddleware,
        secret_keys=settings.session_keys_list,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE,
        https_only=settings.is_production,
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(MarketplaceException, marketplace_exception_handler)
    app.add_exception_handler(DatabaseError, database_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    # =========================================================================
    # Static Files
    # =========================================================================

    if PUBLIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=PUBLIC_DIR), name="static")

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(home.create_router(db, templates, rng=rng), tags=["Home"])
    app.include_router(health.create_router(db, settings), tags=["Health"])
    app.include_router(auth_routes.create_router(db, templates), prefix="/auth", tags=["Auth"])
    app.include_router(books.create_router(db), prefix="/books", tags=["Books"])
    app.include_router(items.create_router(db, templates), prefix="/items", tags=["Items"])
    app.include_router(listings.create_router(db, templates), prefix="/listings", tags=["Listings"])
    app.include_router(
        conversations.create_router(db, templates),
        prefix="/conversations",
        tags=["Conversations"],
    )
    app.include_router(favorites.create_router(db, templates), prefix="/favorites", tags=["Favorites"])

    return app


app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
