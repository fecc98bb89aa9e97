from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Google Maps API configuration
    google_maps_api_key: str = ""

    # API configuration
    api_version: str = "1.0"
    log_level: str = "INFO"

    # API call limits
    max_api_calls_per_day: int = 1000

    # Seconds allowed for a single walking-directions lookup
    directions_timeout_s: float = 10.0

    # Builders run for each request, in output order ("street", "geometric")
    route_strategies: List[str] = ["street", "geometric"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
