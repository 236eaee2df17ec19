"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Plot Layout Parameters
    plot_spacing: int = Field(
        default=1, ge=0,
        description="Cells kept free between automatically placed plots"
    )
    boundary_margin: int = Field(
        default=1, ge=0,
        description="Cells kept free along every edge of the farm grid"
    )
    default_grid_size: str = Field(
        default="30x30",
        description="Grid preset used for new farms (20x20, 30x30 or 40x40)"
    )
    drag_epsilon: float = Field(
        default=0.1, ge=0,
        description="Minimum change in cells before a drag emits a new position"
    )
    allow_overlap_on_drag: bool = Field(
        default=True,
        description="Whether a dragged plot may come to rest on top of another plot"
    )

    # Boundary Survey Parameters
    earth_radius_meters: float = Field(
        default=6371000.0,
        description="Mean Earth radius used by the haversine distance"
    )
    meters_per_degree_latitude: float = Field(
        default=111320.0,
        description="Meters per degree used by the local planar projection"
    )
    acre_square_meters: float = Field(
        default=4046.8564224,
        description="Square meters in one international acre"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Farm Layout Planner",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
