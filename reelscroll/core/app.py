"""
FastAPI Application Factory
Creates and configures the FastAPI app instance
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from reelscroll.api.endpoints import health, home, pages
from reelscroll.core.config import settings
from reelscroll.services.cache import CacheManager
from reelscroll.services.pages import get_page_manager
from reelscroll.services.search import get_search_client
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    # Startup
    logger.info("Starting reelscroll")
    logger.info(f"Search API: {settings.SEARCH_API_URL} (anchor year {settings.ANCHOR_YEAR})")

    page_manager = get_page_manager()
    page_manager.start(interval_seconds=settings.PAGE_SWEEP_INTERVAL_SECONDS)
    logger.info(f"Idle pages discarded after {settings.PAGE_IDLE_TIMEOUT_SECONDS}s")

    yield

    # Shutdown
    logger.info("Shutting down reelscroll")

    await page_manager.stop()
    await get_search_client().close()
    await CacheManager().close()


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="reelscroll",
        description="Category browsing and infinite-scroll discovery for movies, TV series and anime",
        version="1.0.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(home.router)
    app.include_router(pages.router)

    return app
