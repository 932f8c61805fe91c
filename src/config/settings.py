from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict

# Sample survey shipped with the project; point MHVIZ_DATASET_PATH at the full export
DEFAULT_DATASET = Path(__file__).resolve().parents[2] / "data" / "mental-health.csv"


class Settings(BaseSettings):
    dataset_path: str = Field(str(DEFAULT_DATASET), description="Survey CSV loaded once at startup")
    max_rows: int = Field(50000, description="Maximum allowed rows in the dataset")
    max_columns: int = Field(200, description="Maximum allowed columns in the dataset")
    resize_debounce_ms: int = Field(100, description="Quiet period before a viewport change triggers a rebuild")
    brush_tick_ms: int = Field(50, description="Minimum gap between brush posts while the page drags a brush")
    histogram_transition_ms: int = Field(750, description="Bar height enter transition")
    pie_transition_ms: int = Field(1000, description="Slice angle enter transition")
    default_width: int = Field(700, description="Chart width used until the browser reports a viewport")
    default_height: int = Field(400, description="Chart height used until the browser reports a viewport")
    log_level: str = Field("INFO", description="Logging level")
    cors_allow_origins: str = Field(
        "*",
        description="CORS allow origins for the API (use '*' or a comma-separated list)",
    )

    model_config = ConfigDict(env_prefix="MHVIZ_", case_sensitive=False)


settings = Settings()
