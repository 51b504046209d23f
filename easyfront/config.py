"""
Configuration for EasyFront.

Values come from environment variables with editor defaults.
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .canvas.grid import DEFAULT_GRID_SIZE, GRID_SIZES
from .services.css_generator import LayoutMode


class AppConfig(BaseModel):
    """Runtime configuration for the editor backend."""
    data_dir: Path = Path("data")
    default_grid_size: int = DEFAULT_GRID_SIZE
    layout_mode: LayoutMode = LayoutMode.RELATIVE
    log_level: str = "INFO"
    cors_origins: list = Field(default_factory=lambda: ["*"])

    @field_validator("default_grid_size")
    @classmethod
    def _known_grid_size(cls, value: int) -> int:
        if value not in GRID_SIZES:
            raise ValueError(f"grid size must be one of {GRID_SIZES}")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            data_dir=Path(os.getenv("EASYFRONT_DATA_DIR", "data")),
            default_grid_size=int(os.getenv("EASYFRONT_GRID_SIZE", str(DEFAULT_GRID_SIZE))),
            layout_mode=os.getenv("EASYFRONT_LAYOUT_MODE", LayoutMode.RELATIVE.value),
            log_level=os.getenv("EASYFRONT_LOG_LEVEL", "INFO"),
            cors_origins=[
                origin.strip()
                for origin in os.getenv("EASYFRONT_CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ],
        )
