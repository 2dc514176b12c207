"""tilegrid settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TilegridSettings(BaseSettings):
    """Tilegrid settings."""

    # `proj` uses pyproj, `basic` only knows WGS84 <-> Web Mercator
    transform_backend: Literal["proj", "basic"] = "proj"

    # Directory with user defined TileMatrixSet JSON documents
    tilematrixset_directory: str | None = None

    # Highest zoom level `hilbert_tile` will look for
    hilbert_max_zoom: int = Field(default=27, ge=0)

    # Number of decimals used when checking if a point is within TMS bounds
    bbox_precision: int = Field(default=5, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="TILEGRID_", env_file=".env", extra="ignore"
    )
