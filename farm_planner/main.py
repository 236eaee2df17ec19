"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from farm_planner.config import settings
from farm_planner.middleware.error_handler import ErrorHandlerMiddleware
from farm_planner.api.v1.routers import farms, layout, seasonal_data, surveys

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Rate limiter applied to every route
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_requests}/minute"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Layout config: spacing={settings.plot_spacing}, "
                f"boundary_margin={settings.boundary_margin}, "
                f"allow_overlap_on_drag={settings.allow_overlap_on_drag}")
    logger.info(f"Survey config: acre={settings.acre_square_meters}m², "
                f"earth_radius={settings.earth_radius_meters}m")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    yield

    # Shutdown
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Farm Layout Planning API

    This API places plots on a farm grid, constrains interactive plot drags,
    records walking paths, and measures field boundaries walked with GPS.

    ## Features

    - **Automatic Plot Placement**: Find a free, evenly spaced position for
      each new plot, falling back to denser packing when the grid fills up
    - **Drag Constraints**: Clamp and snap dragged plots inside the farm
      boundary margin
    - **Boundary Surveys**: Record GPS corners while walking a field, then
      compute its area (m² and acres) and perimeter
    - **Seasonal Baseline Data**: Record past crops, inputs and yields with
      productivity per acre and per m²
    - **Rate Limiting**: Protects the API from abuse

    ## Measurement Method

    1. Project GPS points onto a local plane centred on their mean
    2. Apply the shoelace formula for area
    3. Sum haversine distances around the closed boundary for perimeter
    4. Report the WGS84 geodesic area alongside for comparison
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    debug=settings.debug,
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(layout.router, prefix="/api/v1")
app.include_router(farms.router, prefix="/api/v1")
app.include_router(surveys.router, prefix="/api/v1")
app.include_router(seasonal_data.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
