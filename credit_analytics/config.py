"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "credit-analytics"
    log_level: str = "INFO"

    # Engine tunables
    revenue_yield: float = 0.15  # Share of income booked as revenue
    fraud_threshold: float = 0.7
    growth_window_days: int = 180
    default_probability: float = 0.6  # Share of high-risk customers expected to default

    # Synthetic portfolio
    sample_portfolio_size: int = 500

    # Upload limits
    max_upload_bytes: int = 5_000_000


settings = Settings()
