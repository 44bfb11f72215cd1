"""FastAPI application setup module."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sales_api.database.database import SalesStore
from sales_api.endpoints.sales import router as sales_router
from sales_api.exceptions.handlers import add_exception_handlers
from sales_api.services.cache import clear_cache as _clear_cache, get_cache_stats
from sales_api.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the sales store for the lifetime of the process."""
    store = SalesStore.from_url(settings.DATABASE_URL, echo=settings.DEBUG)
    app.state.store = store
    logger.info("Sales store ready")
    try:
        yield
    finally:
        await store.dispose()
        logger.info("Sales store disposed")


app = FastAPI(
    title="Sales Listing API",
    description="Search, filter, sort and page through retail sales transactions",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(sales_router)


@app.get("/")
async def root():
    return {"success": True, "message": "Sales Listing API"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/cache/clear", tags=["admin"])
async def clear_cache():
    """Clear cached filter options and statistics. Use after a data reload."""
    count = _clear_cache()
    return {"cleared": count, "message": f"Cleared {count} cached entries"}


@app.get("/cache/stats", tags=["admin"])
async def cache_stats():
    """Get cache statistics for debugging."""
    return get_cache_stats()
