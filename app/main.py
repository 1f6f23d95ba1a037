"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import availability, configuration, courts, public, reservations, stats
from app.core.config import settings
from app.core.database import AsyncSessionLocal, init_db
from app.services.events import log_reservation_event, reservation_events
from app.services.seed import seed_defaults

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Court Booking service")
    logger.info(f"Debug mode: {settings.DEBUG}")

    await init_db()
    if settings.SEED_DEFAULTS:
        async with AsyncSessionLocal() as db:
            await seed_defaults(db)

    unsubscribe = reservation_events.subscribe(log_reservation_event)

    yield

    # Shutdown
    logger.info("Shutting down Court Booking service")
    unsubscribe()


# Create FastAPI app
app = FastAPI(
    title="Court Booking",
    description="Court reservations, availability and pricing for a sports facility",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(configuration.router)
app.include_router(courts.router)
app.include_router(reservations.router)
app.include_router(availability.router)
app.include_router(public.router)
app.include_router(stats.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
