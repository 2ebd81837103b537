from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    user_agent: str = "healthbridge/0.1 (community-health-resources)"
    geocoder_timeout: float = 15.0
    overpass_timeout: int = 25
    search_radius_m: int = 5000
    default_location: str = "Los Angeles"
    rate_limit_per_minute: int = 30
    rate_limit_window: int = 60
    rate_limit_sweep_interval: int = 60
    trust_forwarded_for: bool = False
    cors_origins: str = "*"
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
