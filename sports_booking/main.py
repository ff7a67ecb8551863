"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sports_booking.api import bookings, rates
from sports_booking.core.config import settings
from sports_booking.core.database import init_db

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
    logger.info("Starting Sports Booking API")
    logger.info(f"Debug mode: {settings.DEBUG}")

    if settings.AUTO_CREATE_TABLES:
        await init_db()
        logger.info("Database tables ready")

    yield

    # Shutdown
    logger.info("Shutting down Sports Booking API")


# Create FastAPI app
app = FastAPI(
    title="Sports Booking API",
    description="Book sports facility slots without double booking and report on revenue",
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
app.include_router(bookings.router)
app.include_router(rates.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
