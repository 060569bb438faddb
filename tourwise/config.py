from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Travel model
    average_speed_kmh: float = Field(default=50.0, gt=0)
    daily_travel_budget_km: float = Field(default=600.0, gt=0)

    # Gap detection
    min_idle_days: int = 1

    # Gap suggestions
    max_gap_suggestions: int = 10
    match_weight_distance: float = 1.0
    match_weight_slack: float = 1.0
    match_weight_affinity: float = 1.0

    # Venue network (radius unset = proximity bonus disabled)
    network_proximity_radius_km: float | None = None
    network_proximity_bonus: int = 5

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
